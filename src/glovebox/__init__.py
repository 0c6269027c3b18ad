"""
Glovebox - sandboxed container images composed from reusable mods

Glovebox resolves a profile's mods (packages, scripts, environment) into a
dependency-ordered set and renders a deterministic Dockerfile for it.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
