"""Closed category enums and the industry vocabulary."""
