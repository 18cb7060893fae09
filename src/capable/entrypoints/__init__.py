"""Entry points for CAPABLE. They talk to the application through `capable.bootstrap` only."""
