"""MongoDB persistence."""
