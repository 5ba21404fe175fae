"""Infrastructure layer: stores, adapters, observability and monitoring."""
