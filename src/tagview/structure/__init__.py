"""Read-only access to a tagged document's logical structure tree.

This package provides the traversal and text extraction layer on top of an
already-parsed structure tree:

- **Cursor**: ``StructureElementIter`` walks siblings at one level and
  descends into children; ``walk`` performs a full pre-order traversal.
- **Element facade**: ``StructureElement`` exposes the kind, page, scalar
  attributes, plain text and text spans of one node.
- **Run segmenter**: ``segment`` turns marked-content operations into
  attributed ``TextSpan`` runs.

Example:
    from tagview.backends import open_document
    from tagview.structure import walk

    document = open_document(Path("report.pdf"))
    for depth, element in walk(document):
        print("  " * depth, element.kind.value, element.title or "")
"""

from tagview.structure.cursor import (
    ChildLevel,
    RootLevel,
    StructureElementIter,
    walk,
)
from tagview.structure.element import StructureElement
from tagview.structure.encoding import UnicodeMap, decode_text_string
from tagview.structure.protocols import PageRef, StructureDocument, StructureNode
from tagview.structure.segmenter import SpanBuilder, segment

__all__ = [
    "ChildLevel",
    "PageRef",
    "RootLevel",
    "SpanBuilder",
    "StructureDocument",
    "StructureElement",
    "StructureElementIter",
    "StructureNode",
    "UnicodeMap",
    "decode_text_string",
    "segment",
    "walk",
]
