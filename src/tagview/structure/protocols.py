"""Interfaces of the document collaborator that owns the structure tree.

TagView never parses documents itself. A backend (see ``tagview.backends``)
wraps an already-parsed document and exposes it through these protocols. The
tree is immutable once built, so child counts and indexed access stay
consistent for the lifetime of the document.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import Protocol, runtime_checkable

from tagview.models.kinds import RoleType
from tagview.models.marked_content import MarkedContentOp

# Opaque page handle; only the owning document knows how to resolve it
PageRef = Hashable


@runtime_checkable
class StructureNode(Protocol):
    """A node of the external structure tree."""

    @property
    def role_type(self) -> RoleType:
        """Raw role tag of the node."""
        ...

    def child_count(self) -> int:
        """Number of child nodes."""
        ...

    def child_at(self, index: int) -> StructureNode:
        """Return the child at ``index`` (``0 <= index < child_count()``)."""
        ...

    def page_ref(self) -> PageRef | None:
        """Reference to the page holding the node, if any."""
        ...

    def raw_id(self) -> str | bytes | None: ...

    def raw_title(self) -> str | bytes | None: ...

    def raw_language(self) -> str | bytes | None: ...

    def raw_expanded_abbr(self) -> str | bytes | None:
        """Expanded form of an abbreviation; only meaningful on Span nodes."""
        ...

    def raw_alt_text(self) -> str | bytes | None: ...

    def raw_actual_text(self) -> str | bytes | None: ...

    def is_content(self) -> bool:
        """Whether the node denotes actual document content."""
        ...

    def is_inline(self) -> bool: ...

    def is_block(self) -> bool: ...

    def marked_content_ops(self) -> Sequence[MarkedContentOp]:
        """Ordered marked-content operations of a content node.

        Raises:
            NotContentError: If called on a non-content node
        """
        ...

    def plain_text(self, recursive: bool) -> str | None:
        """Raw text of the node, optionally including its subtree."""
        ...


@runtime_checkable
class StructureDocument(Protocol):
    """A loaded document that may carry a structure tree."""

    def has_structure_tree(self) -> bool: ...

    def root_count(self) -> int:
        """Number of top-level structure elements."""
        ...

    def root_at(self, index: int) -> StructureNode:
        """Return the top-level element at ``index``."""
        ...

    def resolve_page_index(self, page_ref: PageRef) -> int:
        """Resolve a page reference to a 1-based page number.

        Returns:
            The page number, or 0 when the reference names no page of the
            document.

        Raises:
            PageReferenceError: If the reference is not of the backend's type
        """
        ...
