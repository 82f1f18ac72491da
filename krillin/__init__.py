"""Subtitle task configuration, HTTP backend, task client and theme palettes."""

__version__ = "0.1.0"