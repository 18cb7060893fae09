"""The ``capable`` command-line interface."""
