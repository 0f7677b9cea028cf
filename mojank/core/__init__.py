"""Fetching, resolution and caching."""
