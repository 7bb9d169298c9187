"""Flip 7 card-counting assistant."""

__version__ = "1.0.0"
