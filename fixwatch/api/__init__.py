"""HTTP API for the report lifecycle."""
