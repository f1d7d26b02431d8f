"""Onyx Forge: AI advertising banner generation service."""

__version__ = "1.0.0"
