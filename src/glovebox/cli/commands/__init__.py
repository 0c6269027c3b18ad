"""Top-level glovebox commands."""
