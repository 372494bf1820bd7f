"""Infrastructure: cross-cutting concerns (observability)."""
