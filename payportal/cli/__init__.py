"""Pay Portal command-line interface."""
