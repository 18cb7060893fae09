"""End-to-end tests of the ``capable`` command line."""
