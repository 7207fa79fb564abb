"""Data access objects for the infrastructure management schema."""

__version__ = "0.1.0"
