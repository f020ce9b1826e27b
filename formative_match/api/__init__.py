"""Marketplace backend HTTP client."""
