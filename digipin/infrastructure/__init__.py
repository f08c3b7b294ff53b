"""Infrastructure services (logging)."""
