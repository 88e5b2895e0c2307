"""Low-level clients for external systems."""
