"""Configuration loading and validation for TagView.

Main components:
- ConfigLoader: Merge defaults, YAML files and environment variables
- load_config: One-call helper for CLI commands
- flatten_pydantic_errors: Readable messages for validation failures
- format_location: Error location as a path into the input
"""

from tagview.config.loader import ConfigLoader, load_config
from tagview.config.validator import flatten_pydantic_errors, format_location

__all__ = [
    "ConfigLoader",
    "flatten_pydantic_errors",
    "format_location",
    "load_config",
]
