"""Helpers shared by the TagView CLI commands."""

import sys
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import click

from tagview.backends import open_document
from tagview.config.loader import load_config
from tagview.lib.errors import ConfigError, TagViewError
from tagview.lib.logging_config import get_logger, setup_logging
from tagview.structure.encoding import UnicodeMap
from tagview.structure.protocols import StructureDocument

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Exit codes
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def common_options(func: F) -> F:
    """Attach the document argument and the options every command accepts."""
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Path to a tagview.yaml configuration file",
    )(func)
    func = click.option(
        "--encoding",
        type=str,
        default=None,
        help="Output text encoding (overrides configuration)",
    )(func)
    func = click.option(
        "--quiet", "-q", is_flag=True, help="Only report warnings and errors"
    )(func)
    func = click.option(
        "--verbose", "-v", is_flag=True, help="Enable verbose debug logging"
    )(func)
    func = click.argument(
        "document_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
    )(func)
    return func


def open_for_command(
    document_path: Path,
    config_path: Path | None,
    encoding: str | None,
    verbose: bool,
    quiet: bool,
) -> tuple[StructureDocument, UnicodeMap]:
    """Configure logging, load settings and open the document.

    Returns:
        The opened document and the output encoding map

    Raises:
        TagViewError: If configuration or document loading fails
    """
    setup_logging(verbose=verbose, quiet=quiet)
    config = load_config(
        config_path=config_path,
        overrides={
            "text_encoding": encoding,
            "verbose": verbose or None,
            "quiet": quiet or None,
        },
    )
    # Config files may enable verbosity the flags did not
    setup_logging(verbose=config.verbose, quiet=config.quiet)

    logger.debug(f"Opening {document_path} (encoding={config.text_encoding})")
    document = open_document(document_path)
    return document, UnicodeMap(config.text_encoding)


def handle_errors(func: F) -> F:
    """Turn TagView errors into CLI error messages and exit codes."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigError as e:
            logger.error(f"Configuration error: {e}", exc_info=True)
            click.echo(f"Configuration Error: {e}", err=True)
            sys.exit(EXIT_CONFIG_ERROR)
        except TagViewError as e:
            logger.error(f"Command failed: {e}", exc_info=True)
            click.echo(f"Error: {e}", err=True)
            sys.exit(EXIT_ERROR)

    return wrapper  # type: ignore[return-value]
