"""CLI command printing the plain text of structure elements."""

from pathlib import Path

import click

from tagview.cli.commands._shared import common_options, handle_errors, open_for_command
from tagview.structure.cursor import StructureElementIter, walk


@click.command()
@common_options
@click.option(
    "--recursive/--own",
    default=True,
    help="Print each top-level element's subtree text (default), or the "
    "own text of every element",
)
@handle_errors
def text(
    document_path: Path,
    verbose: bool,
    quiet: bool,
    encoding: str | None,
    config_path: Path | None,
    recursive: bool,
) -> None:
    """Print the text enclosed by structure elements.

    DOCUMENT_PATH is a tagged PDF or a YAML/JSON structure tree description.
    """
    document, unicode_map = open_for_command(
        document_path, config_path, encoding, verbose, quiet
    )

    if not document.has_structure_tree():
        click.echo("Document has no structure tree.", err=True)
        return

    if recursive:
        it = StructureElementIter.new(document, unicode_map)
        if it is None:
            return
        for element in it.iter_elements():
            content = element.get_text(recursive=True)
            if content is not None:
                click.echo(content)
        return

    for depth, element in walk(document, unicode_map):
        content = element.get_text(recursive=False)
        if content is not None:
            click.echo("  " * depth + content)
