"""TagView - Inspect the logical structure tree of tagged PDF documents.

TagView exposes the structure tree of a tagged PDF (or of a YAML/JSON
description of one) as typed structure elements that can be walked with a
cursor, queried for their attributes and text, and split into attributed
text spans.

Main features:
- Classify structure element roles into a closed set of kinds
- Navigate the tree with copyable sibling/child cursors
- Extract own and recursive element text
- Segment marked content into bold/italic/font/color/link text spans
"""

from tagview.lib.errors import ConfigError, ContractViolationError, TagViewError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "ContractViolationError",
    "TagViewError",
]
