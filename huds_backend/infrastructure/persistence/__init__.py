"""Menu persistence adapters."""
