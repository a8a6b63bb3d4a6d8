"""Interfaces package."""
