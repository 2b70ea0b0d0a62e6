"""Bundled zone catalog data."""
