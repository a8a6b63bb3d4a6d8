"""Enums package."""
