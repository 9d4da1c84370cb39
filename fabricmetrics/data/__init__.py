"""Packaged template and device catalog data."""
