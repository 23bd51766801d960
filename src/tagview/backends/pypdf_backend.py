"""Structure tree backend for tagged PDF files, built on pypdf.

The backend reads the document's ``/StructTreeRoot`` and exposes it through
the ``StructureDocument``/``StructureNode`` protocols:

- Top-level elements are the entries of the tree root's ``/K``.
- Role names (``/S``) are resolved through ``/RoleMap``; anything that does
  not end at a standard structure type becomes ``RoleType.UNKNOWN``.
- Integer MCIDs and ``/MCR`` dictionaries become content nodes, ``/OBJR``
  dictionaries become object references.
- ``/Pg`` page references are inherited by descendants and resolved to
  1-based page numbers through the document's page list.

Page content streams are not interpreted, so content nodes expose no
marked-content operations; text comes from ``/ActualText`` only.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from pypdf.generic import ArrayObject, DictionaryObject, IndirectObject

from tagview.lib.errors import (
    DocumentLoadError,
    FileNotFoundError,
    NotContentError,
    PageReferenceError,
)
from tagview.lib.logging_config import get_logger
from tagview.models.kinds import ElementClass, RoleType, element_class
from tagview.models.marked_content import MarkedContentOp
from tagview.structure.encoding import decode_text_string
from tagview.structure.protocols import PageRef

logger = get_logger(__name__)

# Role tags that only describe content items, never an /S value
_NON_STRUCTURE_ROLES = frozenset({RoleType.UNKNOWN, RoleType.MCID, RoleType.OBJR})

# (object number, generation) of a page object
PdfPageRef = tuple[int, int]


def _resolve(obj: Any) -> Any:
    """Dereference indirect objects."""
    if isinstance(obj, IndirectObject):
        return obj.get_object()
    return obj


def _name(value: Any) -> str | None:
    """Return a PDF name without its leading slash."""
    value = _resolve(value)
    if value is None:
        return None
    text = str(value)
    return text[1:] if text.startswith("/") else text


def _page_ref_of(value: Any) -> PdfPageRef | None:
    if isinstance(value, IndirectObject):
        return (value.idnum, value.generation)
    return None


def _raw_string(value: Any) -> str | bytes | None:
    value = _resolve(value)
    if value is None:
        return None
    if isinstance(value, bytes):
        return bytes(value)
    return str(value)


class PypdfNode:
    """A structure element, marked-content item or object reference."""

    def __init__(
        self,
        document: PypdfDocument,
        obj: Any,
        role_type: RoleType,
        page_ref: PdfPageRef | None,
    ) -> None:
        self.document = document
        self.obj = obj
        self._role_type = role_type
        self._page_ref = page_ref
        self._children: list[PypdfNode] | None = None

    def __repr__(self) -> str:
        return f"PypdfNode(role={self._role_type.value!r}, page_ref={self._page_ref})"

    @property
    def role_type(self) -> RoleType:
        return self._role_type

    def _is_element(self) -> bool:
        return self._role_type not in (RoleType.MCID, RoleType.OBJR)

    def _get(self, key: str) -> Any:
        if not self._is_element():
            return None
        return self.obj.get(key)

    def _load_children(self) -> list[PypdfNode]:
        if self._children is None:
            if self._is_element():
                self._children = self.document._build_nodes(
                    self.obj.get("/K"), self._page_ref
                )
            else:
                self._children = []
        return self._children

    def child_count(self) -> int:
        return len(self._load_children())

    def child_at(self, index: int) -> PypdfNode:
        return self._load_children()[index]

    def page_ref(self) -> PageRef | None:
        return self._page_ref

    def raw_id(self) -> str | bytes | None:
        return _raw_string(self._get("/ID"))

    def raw_title(self) -> str | bytes | None:
        return _raw_string(self._get("/T"))

    def raw_language(self) -> str | bytes | None:
        return _raw_string(self._get("/Lang"))

    def raw_expanded_abbr(self) -> str | bytes | None:
        return _raw_string(self._get("/E"))

    def raw_alt_text(self) -> str | bytes | None:
        return _raw_string(self._get("/Alt"))

    def raw_actual_text(self) -> str | bytes | None:
        return _raw_string(self._get("/ActualText"))

    def is_content(self) -> bool:
        return self._role_type == RoleType.MCID

    def is_inline(self) -> bool:
        return element_class(self._role_type) == ElementClass.INLINE

    def is_block(self) -> bool:
        return element_class(self._role_type) == ElementClass.BLOCK

    def marked_content_ops(self) -> Sequence[MarkedContentOp]:
        if not self.is_content():
            raise NotContentError(self._role_type)
        # Content streams are not interpreted by this backend
        return ()

    def plain_text(self, recursive: bool) -> str | None:
        own = decode_text_string(self.raw_actual_text())
        if not recursive or own is not None:
            return own

        pieces = []
        for child in self._load_children():
            child_text = child.plain_text(True)
            if child_text is not None:
                pieces.append(child_text)
        return "".join(pieces) if pieces else None


class PypdfDocument:
    """``StructureDocument`` implementation over a ``pypdf.PdfReader``."""

    def __init__(self, reader: PdfReader) -> None:
        self.reader = reader
        catalog = _resolve(reader.trailer["/Root"])
        tree_root = _resolve(catalog.get("/StructTreeRoot"))
        self._tree_root: DictionaryObject | None = (
            tree_root if isinstance(tree_root, DictionaryObject) else None
        )

        self._role_map: dict[str, str] = {}
        if self._tree_root is not None:
            role_map = _resolve(self._tree_root.get("/RoleMap"))
            if isinstance(role_map, DictionaryObject):
                for key, value in role_map.items():
                    target = _name(value)
                    if target is not None:
                        self._role_map[_name(key) or ""] = target

        self._page_numbers: dict[PdfPageRef, int] = {}
        for number, page in enumerate(reader.pages, start=1):
            ref = page.indirect_reference
            if ref is not None:
                self._page_numbers[(ref.idnum, ref.generation)] = number

        self._roots: list[PypdfNode] = (
            self._build_nodes(self._tree_root.get("/K"), None)
            if self._tree_root is not None
            else []
        )
        logger.debug(
            f"PDF structure tree: present={self._tree_root is not None}, "
            f"roots={len(self._roots)}, pages={len(self._page_numbers)}"
        )

    def resolve_role(self, name: str | None) -> RoleType:
        """Map an ``/S`` value to a standard role, following the role map.

        Returns:
            The standard role, or ``RoleType.UNKNOWN`` when the name (or the
            role map chain it starts) does not end at a standard type.
        """
        seen: set[str] = set()
        while name is not None and name not in seen:
            role = RoleType.from_name(name)
            if role is not None and role not in _NON_STRUCTURE_ROLES:
                return role
            seen.add(name)
            name = self._role_map.get(name)

        return RoleType.UNKNOWN

    def _build_nodes(
        self, kids: Any, inherited_page: PdfPageRef | None
    ) -> list[PypdfNode]:
        kids = _resolve(kids)
        if kids is None:
            return []
        items = list(kids) if isinstance(kids, ArrayObject) else [kids]

        nodes: list[PypdfNode] = []
        for item in items:
            node = self._build_node(_resolve(item), inherited_page)
            if node is not None:
                nodes.append(node)
        return nodes

    def _build_node(
        self, item: Any, inherited_page: PdfPageRef | None
    ) -> PypdfNode | None:
        if isinstance(item, int):
            return PypdfNode(self, item, RoleType.MCID, inherited_page)

        if not isinstance(item, DictionaryObject):
            logger.debug(f"Skipping unexpected structure kid: {item!r}")
            return None

        # dict.get keeps the indirect reference that identifies the page
        page_ref = _page_ref_of(dict.get(item, "/Pg")) or inherited_page
        kid_type = _name(item.get("/Type"))
        if kid_type == "MCR":
            return PypdfNode(self, item, RoleType.MCID, page_ref)
        if kid_type == "OBJR":
            return PypdfNode(self, item, RoleType.OBJR, page_ref)
        if "/S" not in item:
            logger.debug("Skipping structure kid without /S entry")
            return None
        return PypdfNode(self, item, self.resolve_role(_name(item["/S"])), page_ref)

    def has_structure_tree(self) -> bool:
        return self._tree_root is not None

    def root_count(self) -> int:
        return len(self._roots)

    def root_at(self, index: int) -> PypdfNode:
        return self._roots[index]

    def resolve_page_index(self, page_ref: PageRef) -> int:
        if not isinstance(page_ref, tuple):
            raise PageReferenceError(page_ref, "expected an (object, generation) pair")
        number = self._page_numbers.get(page_ref, 0)  # type: ignore[arg-type]
        if not number:
            logger.debug(f"/Pg reference {page_ref!r} is not a page of this document")
        return number


def open_pdf_document(path: Path) -> PypdfDocument:
    """Open a tagged PDF file.

    Args:
        path: Path to the PDF file

    Returns:
        Document exposing the PDF's structure tree

    Raises:
        FileNotFoundError: If the file does not exist
        DocumentLoadError: If pypdf cannot parse the file
    """
    if not path.is_file():
        raise FileNotFoundError(str(path), "Provide an existing PDF file.")

    logger.debug(f"Opening PDF document: {path}")
    try:
        reader = PdfReader(str(path))
        return PypdfDocument(reader)
    except PdfReadError as e:
        raise DocumentLoadError(str(path), str(e)) from e
