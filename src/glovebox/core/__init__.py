"""Glovebox core: mod resolution, layering, artifact emission and drift tracking."""
