"""Caching package."""
