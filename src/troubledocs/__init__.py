"""Troubleshooting documentation search for cloud providers."""

__version__ = "0.1.0"
