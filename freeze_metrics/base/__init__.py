"""Base layer: errors, logging, settings DTOs and the metrics core."""
