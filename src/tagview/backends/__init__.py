"""Document backends that expose a structure tree to TagView.

- **memory**: YAML/JSON/dict descriptions validated with Pydantic; supports
  full marked-content operation streams.
- **pypdf_backend**: tagged PDF files read with pypdf; exposes the structure
  tree, page references and scalar attributes.

Example:
    from tagview.backends import open_document

    document = open_document(Path("fixture.yaml"))
"""

from pathlib import Path

from tagview.backends.memory import MemoryDocument, MemoryNode, load_document
from tagview.backends.pypdf_backend import PypdfDocument, PypdfNode, open_pdf_document
from tagview.config.defaults import DOCUMENT_FIXTURE_SUFFIXES, PDF_SUFFIXES
from tagview.lib.errors import ConfigError
from tagview.structure.protocols import StructureDocument


def open_document(path: Path) -> StructureDocument:
    """Open a document with the backend matching its file extension.

    Args:
        path: ``.pdf`` file, or ``.yaml``/``.yml``/``.json`` description

    Returns:
        The opened document

    Raises:
        ConfigError: If the extension is not supported
        FileNotFoundError: If the file does not exist
        DocumentLoadError: If a PDF cannot be parsed
    """
    suffix = path.suffix.lower()
    if suffix in PDF_SUFFIXES:
        return open_pdf_document(path)
    if suffix in DOCUMENT_FIXTURE_SUFFIXES:
        return load_document(path)

    supported = ", ".join(PDF_SUFFIXES + DOCUMENT_FIXTURE_SUFFIXES)
    raise ConfigError(str(path), f"Unsupported file type; expected one of {supported}")


__all__ = [
    "MemoryDocument",
    "MemoryNode",
    "PypdfDocument",
    "PypdfNode",
    "load_document",
    "open_document",
    "open_pdf_document",
]
