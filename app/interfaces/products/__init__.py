"""Products HTTP interface."""
