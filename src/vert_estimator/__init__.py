"""Vertical jump height estimation from video hang time."""

__version__ = "0.1.0"
