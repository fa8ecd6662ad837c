"""diffgate command line interface."""
