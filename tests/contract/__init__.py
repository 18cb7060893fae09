"""Contract tests: one behavior suite, run against every user storage provider."""
