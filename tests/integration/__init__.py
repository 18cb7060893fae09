"""Integration tests against real databases, migrations and wiring."""
