"""ptree command line interface."""
