"""Mod catalog commands (glovebox mod <command>)."""
