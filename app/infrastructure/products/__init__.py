"""Products infrastructure adapters."""
