"""Dish recognition proxy API."""

__version__ = "1.0.0"
