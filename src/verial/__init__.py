"""Verial: marketplace business rules and regional lookup tooling."""

__version__ = "0.4.0"
