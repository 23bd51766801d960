"""Entry point for the ``tagview`` command-line tool."""

import click

from tagview import __version__
from tagview.cli.commands.spans import spans
from tagview.cli.commands.text import text
from tagview.cli.commands.tree import tree


@click.group()
@click.version_option(version=__version__, prog_name="tagview")
def main() -> None:
    """TagView - inspect the logical structure tree of tagged PDF documents.

    Walk the structure elements of a document, print the text they enclose,
    and show the attributed text spans of their marked content.
    """


main.add_command(tree)
main.add_command(text)
main.add_command(spans)


if __name__ == "__main__":  # pragma: no cover
    main()
