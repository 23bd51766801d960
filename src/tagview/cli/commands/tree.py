"""CLI command printing the structure tree outline of a document.

Implements ``tagview tree``: a pre-order walk of the structure tree, one line
per element, indented by depth.
"""

import json
from pathlib import Path

import click

from tagview.cli.commands._shared import common_options, handle_errors, open_for_command
from tagview.lib.logging_config import get_logger
from tagview.structure.cursor import walk
from tagview.structure.element import StructureElement

logger = get_logger(__name__)


def format_element_line(depth: int, element: StructureElement) -> str:
    """Render one outline line for ``element``.

    Args:
        depth: Depth of the element, 0 for top-level elements
        element: Element to describe

    Returns:
        Indented line such as ``  heading_1 p.1 #intro "Introduction"``.
    """
    parts = [element.kind.value]
    if element.page >= 0:
        parts.append(f"p.{element.page + 1}")
    if element.id:
        parts.append(f"#{element.id}")
    if element.language:
        parts.append(f"[{element.language}]")
    if element.title:
        parts.append(json.dumps(element.title, ensure_ascii=False))
    if element.alt_text:
        parts.append(f"alt={json.dumps(element.alt_text, ensure_ascii=False)}")
    return "  " * depth + " ".join(parts)


@click.command()
@common_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@handle_errors
def tree(
    document_path: Path,
    verbose: bool,
    quiet: bool,
    encoding: str | None,
    config_path: Path | None,
    output_format: str,
) -> None:
    """Print the structure tree outline of a document.

    DOCUMENT_PATH is a tagged PDF or a YAML/JSON structure tree description.
    """
    document, unicode_map = open_for_command(
        document_path, config_path, encoding, verbose, quiet
    )

    if not document.has_structure_tree():
        click.echo("Document has no structure tree.", err=True)
        return

    entries = list(walk(document, unicode_map))
    logger.debug(f"Walked {len(entries)} structure element(s)")

    if output_format == "json":
        payload = [
            {"depth": depth, **element.to_dict()} for depth, element in entries
        ]
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    for depth, element in entries:
        click.echo(format_element_line(depth, element))
