"""Conductor CLI command groups."""
