"""Shared utilities (I/O, merging, path resolution)."""
