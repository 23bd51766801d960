"""Traversal cursor over a document's structure tree.

A ``StructureElementIter`` points at one element among its siblings, either
in the tree's list of top-level elements or among the children of a specific
node. It supports advancing to the next sibling, materializing the current
element and descending into the current element's children.

A full pre-order walk follows the classic pattern::

    def walk_structure(it):
        while True:
            element = it.get_element()
            child = it.get_child()
            if child is not None:
                walk_structure(child)
            if not it.advance():
                break

    it = StructureElementIter.new(document)
    if it is not None:
        walk_structure(it)

``walk`` implements exactly this and yields elements in document order.

Cursors never own tree nodes. They hold a shared reference to the document,
and copies share it too.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from tagview.lib.errors import CursorOutOfRangeError
from tagview.lib.logging_config import get_logger
from tagview.structure.element import StructureElement
from tagview.structure.encoding import UnicodeMap
from tagview.structure.protocols import StructureDocument, StructureNode

logger = get_logger(__name__)


@dataclass(frozen=True)
class RootLevel:
    """Cursor level: the tree's top-level elements."""


@dataclass(frozen=True)
class ChildLevel:
    """Cursor level: the children of ``parent``."""

    parent: StructureNode


Level = RootLevel | ChildLevel


class StructureElementIter:
    """Sibling cursor over one level of a structure tree.

    Attributes:
        document: Document owning the tree
        level: Which sibling list the cursor walks
        index: Position within that list
    """

    def __init__(
        self,
        document: StructureDocument,
        level: Level,
        index: int = 0,
        unicode_map: UnicodeMap | None = None,
    ) -> None:
        self.document = document
        self.level = level
        self.index = index
        self._unicode_map = unicode_map

    @classmethod
    def new(
        cls,
        document: StructureDocument,
        unicode_map: UnicodeMap | None = None,
    ) -> StructureElementIter | None:
        """Create a cursor at the first top-level element of ``document``.

        Args:
            document: Document to traverse
            unicode_map: Output encoding filter passed on to elements

        Returns:
            A cursor, or None if the document has no structure tree or the
            tree has no top-level elements.
        """
        if not document.has_structure_tree():
            logger.debug("Document has no structure tree")
            return None

        if document.root_count() == 0:
            logger.debug("Structure tree has no top-level elements")
            return None

        return cls(document, RootLevel(), 0, unicode_map)

    def __repr__(self) -> str:
        return (
            f"StructureElementIter(level={type(self.level).__name__}, "
            f"index={self.index}, count={self._sibling_count()})"
        )

    def _sibling_count(self) -> int:
        match self.level:
            case RootLevel():
                return self.document.root_count()
            case ChildLevel(parent=parent):
                return parent.child_count()
        raise TypeError(f"Unknown cursor level: {self.level!r}")

    def _current_node(self) -> StructureNode:
        count = self._sibling_count()
        if not 0 <= self.index < count:
            raise CursorOutOfRangeError(self.index, count)

        match self.level:
            case RootLevel():
                return self.document.root_at(self.index)
            case ChildLevel(parent=parent):
                return parent.child_at(self.index)
        raise TypeError(f"Unknown cursor level: {self.level!r}")

    def advance(self) -> bool:
        """Move to the next sibling.

        Returns:
            True if the cursor now points at a valid element. Once False is
            returned the level is exhausted and every further call returns
            False too; the cursor never wraps around.
        """
        count = self._sibling_count()
        if self.index < count:
            self.index += 1
        return self.index < count

    def get_element(self) -> StructureElement:
        """Materialize the element at the cursor.

        Raises:
            CursorOutOfRangeError: If the cursor is past the end of its level
        """
        return StructureElement(
            self.document, self._current_node(), self._unicode_map
        )

    def get_child(self) -> StructureElementIter | None:
        """Return a cursor over the current element's children.

        The receiver is left untouched.

        Returns:
            A new cursor at the first child, or None if there are no children.

        Raises:
            CursorOutOfRangeError: If the cursor is past the end of its level
        """
        node = self._current_node()
        if node.child_count() == 0:
            return None
        return StructureElementIter(
            self.document, ChildLevel(node), 0, self._unicode_map
        )

    def copy(self) -> StructureElementIter:
        """Duplicate the cursor position; the document is shared."""
        return StructureElementIter(
            self.document, self.level, self.index, self._unicode_map
        )

    __copy__ = copy

    def iter_elements(self) -> Iterator[StructureElement]:
        """Yield the element at the cursor and every following sibling.

        The cursor is advanced as elements are yielded.
        """
        if self.index >= self._sibling_count():
            return
        while True:
            yield self.get_element()
            if not self.advance():
                break


def walk(
    document: StructureDocument,
    unicode_map: UnicodeMap | None = None,
) -> Iterator[tuple[int, StructureElement]]:
    """Walk the structure tree of ``document`` in pre-order.

    Args:
        document: Document to traverse
        unicode_map: Output encoding filter passed on to elements

    Yields:
        ``(depth, element)`` pairs in document order; depth 0 is a
        top-level element. Nothing is yielded without a structure tree.
    """
    root = StructureElementIter.new(document, unicode_map)
    if root is None:
        return

    stack: list[tuple[int, StructureElementIter]] = [(0, root)]
    while stack:
        depth, it = stack[-1]
        yield depth, it.get_element()

        child = it.get_child()
        if not it.advance():
            stack.pop()
        if child is not None:
            stack.append((depth + 1, child))
