"""Structure element facade.

``StructureElement`` binds one node of the external structure tree to its
owning document and exposes classification, scalar attributes, plain text
and attributed text spans. Derived values are computed lazily, at most once
per element, and never invalidated since the underlying tree is immutable.

Elements are not meant to be shared across threads without external
synchronization; distinct elements over the same document are independent.
"""

from functools import cached_property
from typing import Any

from tagview.lib.logging_config import get_logger
from tagview.models.kinds import RoleType, StructureElementKind, classify
from tagview.models.text_span import TextSpan
from tagview.structure.encoding import UnicodeMap, decode_text_string
from tagview.structure.protocols import StructureDocument, StructureNode
from tagview.structure.segmenter import segment

logger = get_logger(__name__)

_UNSET: Any = object()


class StructureElement:
    """Read-only view of a single structure tree node.

    Attributes:
        document: The document owning the node
        node: The wrapped structure node
    """

    def __init__(
        self,
        document: StructureDocument,
        node: StructureNode,
        unicode_map: UnicodeMap | None = None,
    ) -> None:
        """Wrap ``node`` of ``document``.

        Args:
            document: Owning document, used to resolve page references
            node: Node to wrap; it stays owned by the document
            unicode_map: Output encoding filter for span text
        """
        self.document = document
        self.node = node
        self._unicode_map = unicode_map if unicode_map is not None else UnicodeMap()
        self._text: str | None = _UNSET
        self._text_recursive: str | None = _UNSET
        self._text_spans: list[TextSpan] | None = None

    def __repr__(self) -> str:
        return f"StructureElement(kind={self.kind.value!r}, page={self.page})"

    @property
    def kind(self) -> StructureElementKind:
        """Semantic kind of the element."""
        return classify(self.node.role_type)

    @cached_property
    def page(self) -> int:
        """0-based index of the page holding the element, or -1 if undefined."""
        page_ref = self.node.page_ref()
        if page_ref is None:
            return -1

        page_number = self.document.resolve_page_index(page_ref)
        if page_number < 1:
            return -1
        logger.debug(f"Resolved page reference {page_ref!r} to page {page_number}")
        return page_number - 1

    def is_content(self) -> bool:
        """Whether the element is actual document content."""
        return self.node.is_content()

    def is_inline(self) -> bool:
        return self.node.is_inline()

    def is_block(self) -> bool:
        return self.node.is_block()

    @cached_property
    def id(self) -> str | None:
        """Identifier of the element, if defined."""
        return decode_text_string(self.node.raw_id())

    @cached_property
    def title(self) -> str | None:
        return decode_text_string(self.node.raw_title())

    @cached_property
    def abbreviation(self) -> str | None:
        """Expanded text of an abbreviation or acronym.

        Only Span elements carry one; every other kind yields None.
        """
        if self.node.role_type != RoleType.SPAN:
            return None
        return decode_text_string(self.node.raw_expanded_abbr())

    @cached_property
    def language(self) -> str | None:
        """Language tag of the element (e.g. ``en-US``), if defined."""
        return decode_text_string(self.node.raw_language())

    @cached_property
    def alt_text(self) -> str | None:
        """Alternate description, mostly used for figures and images.

        Elements that contain proper text should use ``get_text`` instead.
        """
        return decode_text_string(self.node.raw_alt_text())

    @cached_property
    def actual_text(self) -> str | None:
        """Replacement text for content that looks like text, such as a logo."""
        return decode_text_string(self.node.raw_actual_text())

    def get_text(self, recursive: bool = False) -> str | None:
        """Return the text enclosed by the element.

        Args:
            recursive: Also gather the text of the whole subtree, in
                logical order (this node first, then each child depth-first)

        Returns:
            The text, or None if the element has none.
        """
        if recursive:
            if self._text_recursive is _UNSET:
                self._text_recursive = self.node.plain_text(True)
            return self._text_recursive

        if self._text is _UNSET:
            self._text = self.node.plain_text(False)
        return self._text

    def get_text_spans(self) -> list[TextSpan] | None:
        """Return the element's text split into attributed spans.

        Returns:
            Spans in content order, or None for non-content elements.
        """
        if not self.node.is_content():
            return None

        if self._text_spans is None:
            self._text_spans = segment(
                self.node.marked_content_ops(), self._unicode_map
            )
        return list(self._text_spans)

    def to_dict(self, include_spans: bool = False) -> dict[str, Any]:
        """Summarize the element for JSON output.

        Args:
            include_spans: Add the serialized text spans of content elements
        """
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "page": self.page,
            "id": self.id,
            "title": self.title,
            "language": self.language,
            "alt_text": self.alt_text,
            "actual_text": self.actual_text,
            "abbreviation": self.abbreviation,
            "is_content": self.is_content(),
            "is_inline": self.is_inline(),
            "is_block": self.is_block(),
        }
        if include_spans:
            spans = self.get_text_spans()
            data["spans"] = (
                [span.to_dict() for span in spans] if spans is not None else None
            )
        return data
