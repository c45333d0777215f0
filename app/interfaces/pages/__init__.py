"""Pages HTTP interface."""
