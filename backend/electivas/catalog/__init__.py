"""Read-only subject catalog, owned by the web layer."""
