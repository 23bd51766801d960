"""Command-line interface for TagView."""
