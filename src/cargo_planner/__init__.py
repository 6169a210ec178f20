"""Cargo flight planning: airport ranking and flight recommendation."""

__version__ = "0.1.0"
