"""Crop mix recommender: suggests three crops to grow together for a season."""

__version__ = "0.3.0"
