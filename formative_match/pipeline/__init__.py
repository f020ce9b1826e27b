"""Workflows that combine API fetches with the recommendation engine."""
