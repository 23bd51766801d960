"""TagView CLI commands."""
