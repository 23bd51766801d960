"""Logging configuration for TagView.

Every module obtains its logger through ``get_logger(__name__)`` so that all
TagView output lives under the ``tagview`` logger hierarchy. The CLI calls
``setup_logging`` once per invocation with its ``--verbose``/``--quiet``
flags.
"""

import logging
import os
import sys

ROOT_LOGGER_NAME = "tagview"
LOG_LEVEL_ENV_VAR = "TAGVIEW_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

_HANDLER_NAME = "tagview-stderr"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the ``tagview`` hierarchy.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger instance for the module.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def _resolve_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR)
    if env_level:
        level = logging.getLevelName(env_level.upper())
        if isinstance(level, int):
            return level
    return logging.INFO


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the ``tagview`` logger hierarchy.

    Verbose wins over quiet. Without either flag the level comes from
    ``TAGVIEW_LOG_LEVEL`` and falls back to INFO. Calling this repeatedly
    reconfigures the level without stacking handlers.

    Args:
        verbose: Enable DEBUG output
        quiet: Only emit warnings and errors
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(_resolve_level(verbose, quiet))

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            break
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
