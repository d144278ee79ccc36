"""relmap command-line interface."""
