"""Periodic host system metrics recorder writing CSV rows."""

__version__ = "0.1.0"
