"""Adapters for configuration, HTTP serving and probing."""
