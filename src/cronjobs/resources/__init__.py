"""Packaged configuration defaults."""
