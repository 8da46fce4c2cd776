"""ustxconv command line interface."""
