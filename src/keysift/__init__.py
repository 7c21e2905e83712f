"""Structural checks for damaged Bitcoin keys and addresses."""

__version__ = "0.1.0"
