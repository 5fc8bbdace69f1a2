"""Toado - a command-line task and project manager."""

__version__ = "0.1.0"
