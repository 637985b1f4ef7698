"""Embedded raw catalogue tables (stars, planets)."""
