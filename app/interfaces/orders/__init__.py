"""Orders HTTP interface."""
