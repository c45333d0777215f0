"""Pages infrastructure adapters."""
