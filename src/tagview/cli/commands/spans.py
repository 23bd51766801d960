"""CLI command printing the attributed text spans of content elements.

Implements ``tagview spans``: every content element found by a pre-order
walk is segmented into text runs, which are printed with their attributes.
"""

import json
from pathlib import Path
from typing import Any

import click

from tagview.cli.commands._shared import common_options, handle_errors, open_for_command
from tagview.models.text_span import TextSpan
from tagview.structure.cursor import walk


def format_span(span: TextSpan) -> str:
    """Render a span as ``[bold font=Arial] "text"``."""
    attributes = [
        name
        for name in span.to_dict()["flags"]
        if name not in ("font", "color", "link")
    ]
    if span.font_name:
        attributes.append(f"font={span.font_name}")
    if span.color is not None:
        attributes.append(f"color={span.color.to_hex()}")
    if span.link_target:
        attributes.append(f"link={span.link_target}")
    return f"[{' '.join(attributes)}] {json.dumps(span.text, ensure_ascii=False)}"


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
def spans(
    document_path: Path,
    verbose: bool,
    quiet: bool,
    encoding: str | None,
    config_path: Path | None,
    output_format: str,
) -> None:
    """Print the text spans of every content element.

    DOCUMENT_PATH is a tagged PDF or a YAML/JSON structure tree description.
    """
    document, unicode_map = open_for_command(
        document_path, config_path, encoding, verbose, quiet
    )

    if not document.has_structure_tree():
        click.echo("Document has no structure tree.", err=True)
        return

    results: list[dict[str, Any]] = []
    for _depth, element in walk(document, unicode_map):
        element_spans = element.get_text_spans()
        if element_spans is None:
            continue
        results.append(
            {
                "page": element.page,
                "spans": [span.to_dict() for span in element_spans],
            }
        )
        if output_format == "text":
            header = f"content p.{element.page + 1}" if element.page >= 0 else "content"
            click.echo(header)
            for span in element_spans:
                click.echo(f"  {format_span(span)}")

    if output_format == "json":
        click.echo(json.dumps(results, indent=2, ensure_ascii=False))
