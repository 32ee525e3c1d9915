"""Menu ingestion and query use cases."""
