"""Incrementally build shell command lines with contextual suggestions."""

__version__ = "0.1.0"
