"""Courtplay - basketball play diagram playback engine."""

__version__ = "0.1.0"
