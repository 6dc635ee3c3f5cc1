"""Depot Inventory - product import, statistics and export toolkit."""

__version__ = "0.1.0"
