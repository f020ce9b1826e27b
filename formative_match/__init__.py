"""Opportunity recommendations for a creator/brand collaboration marketplace."""

__version__ = "0.1.0"
