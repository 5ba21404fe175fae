"""Domain layer: report lifecycle models and errors."""
