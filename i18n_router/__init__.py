"""Locale-prefixed routing for static multi-language sites."""

__version__ = "0.3.0"
