"""Persistent storage for translations."""
