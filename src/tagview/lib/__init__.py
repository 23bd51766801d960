"""Shared infrastructure for TagView: errors and logging."""
