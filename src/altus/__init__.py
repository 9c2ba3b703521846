"""Altus: city weather lookup with hourly alerts."""

__version__ = "1.0.0"
