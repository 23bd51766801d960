"""In-memory structure tree backend.

Documents are described as plain data (YAML, JSON or Python dicts),
validated with Pydantic and exposed through the ``StructureDocument`` and
``StructureNode`` protocols. This is the backend used for fixtures and for
exercising marked-content segmentation without a PDF parser.

Example document (YAML)::

    page_count: 2
    roots:
      - role: Document
        children:
          - role: H1
            page: 1
            title: Introduction
            children:
              - role: MCID
                page: 1
                ops:
                  - {op: flags, bold: true}
                  - {op: text, value: "Hello"}

Page references are 1-based page numbers. A document without ``roots`` has
no structure tree at all, while ``roots: []`` is an empty tree.
"""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from tagview.config.validator import flatten_pydantic_errors
from tagview.lib.errors import (
    ConfigError,
    FileNotFoundError,
    NotContentError,
    PageReferenceError,
)
from tagview.lib.logging_config import get_logger
from tagview.models.kinds import ElementClass, RoleType, element_class
from tagview.models.marked_content import (
    CharOp,
    ColorOp,
    FlagsOp,
    FontFlags,
    FontNameOp,
    LinkOp,
    MarkedContentOp,
    RGBColor,
)
from tagview.structure.encoding import UnicodeMap
from tagview.structure.protocols import PageRef

logger = get_logger(__name__)

ColorComponent = Annotated[int, Field(ge=0, le=255)]

# Raw text of the model is decoded independently of the output encoding
_RAW_TEXT_MAP = UnicodeMap("utf-8")


class CharOpModel(BaseModel):
    """A single character given by codepoint."""

    model_config = ConfigDict(extra="forbid")

    op: Literal["char"]
    codepoint: int = Field(ge=0)

    def to_ops(self) -> list[MarkedContentOp]:
        return [CharOp(self.codepoint)]


class TextOpModel(BaseModel):
    """Shorthand for one character operation per codepoint of ``value``."""

    model_config = ConfigDict(extra="forbid")

    op: Literal["text"]
    value: str

    def to_ops(self) -> list[MarkedContentOp]:
        return [CharOp(ord(ch)) for ch in self.value]


class FlagsOpModel(BaseModel):
    """Font style change; unspecified styles are off."""

    model_config = ConfigDict(extra="forbid")

    op: Literal["flags"]
    bold: bool = False
    fixed_width: bool = False
    italic: bool = False

    def to_ops(self) -> list[MarkedContentOp]:
        flags = FontFlags.NONE
        if self.bold:
            flags |= FontFlags.BOLD
        if self.fixed_width:
            flags |= FontFlags.FIXED_WIDTH
        if self.italic:
            flags |= FontFlags.ITALIC
        return [FlagsOp(flags)]


class ColorOpModel(BaseModel):
    """Fill color change; ``rgb: null`` clears the color."""

    model_config = ConfigDict(extra="forbid")

    op: Literal["color"]
    rgb: tuple[ColorComponent, ColorComponent, ColorComponent] | None = None

    def to_ops(self) -> list[MarkedContentOp]:
        return [ColorOp(RGBColor(*self.rgb) if self.rgb is not None else None)]


class FontOpModel(BaseModel):
    """Font name change; ``name: null`` clears the font."""

    model_config = ConfigDict(extra="forbid")

    op: Literal["font"]
    name: str | None = None

    def to_ops(self) -> list[MarkedContentOp]:
        return [FontNameOp(self.name)]


class LinkOpModel(BaseModel):
    """Link target for the following text; ``target: null`` ends the link."""

    model_config = ConfigDict(extra="forbid")

    op: Literal["link"]
    target: str | None = None

    def to_ops(self) -> list[MarkedContentOp]:
        return [LinkOp(self.target)]


OpModel = Annotated[
    CharOpModel
    | TextOpModel
    | FlagsOpModel
    | ColorOpModel
    | FontOpModel
    | LinkOpModel,
    Field(discriminator="op"),
]


class StructNodeModel(BaseModel):
    """One node of an in-memory structure tree.

    Attributes:
        role: Raw role tag (``MCID`` marks a content node)
        page: 1-based page number, if the node is tied to a page
        id: Element identifier
        title: Element title
        language: Language tag
        expanded_abbr: Expansion of an abbreviation (Span nodes)
        alt_text: Alternate description
        actual_text: Replacement text
        text: Raw text of the node itself
        ops: Marked-content operations (content nodes only)
        children: Child nodes in logical order
    """

    model_config = ConfigDict(extra="forbid")

    role: RoleType
    page: int | None = Field(default=None, ge=1)
    id: str | None = None
    title: str | None = None
    language: str | None = None
    expanded_abbr: str | None = None
    alt_text: str | None = None
    actual_text: str | None = None
    text: str | None = None
    ops: list[OpModel] = Field(default_factory=list)
    children: list["StructNodeModel"] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_content_shape(self) -> "StructNodeModel":
        """Only content nodes carry operations, and they have no children."""
        if self.role == RoleType.MCID:
            if self.children:
                raise ValueError("content (MCID) nodes cannot have children")
        elif self.ops:
            raise ValueError(f"only MCID nodes can carry ops, not {self.role.value}")
        return self


StructNodeModel.model_rebuild()


class StructTreeModel(BaseModel):
    """A document with an optional structure tree.

    Attributes:
        page_count: Number of pages page references may point into
        roots: Top-level structure elements, or None without a structure tree
    """

    model_config = ConfigDict(extra="forbid")

    page_count: int = Field(default=1, ge=0)
    roots: list[StructNodeModel] | None = None

    @model_validator(mode="after")
    def check_pages(self) -> "StructTreeModel":
        """Every page reference must fall inside the document."""
        pending = list(self.roots or [])
        while pending:
            node = pending.pop()
            if node.page is not None and node.page > self.page_count:
                raise ValueError(
                    f"page {node.page} exceeds page_count {self.page_count}"
                )
            pending.extend(node.children)
        return self


class MemoryNode:
    """``StructureNode`` implementation over a ``StructNodeModel``."""

    def __init__(self, model: StructNodeModel) -> None:
        self.model = model
        self._children = [MemoryNode(child) for child in model.children]
        self._ops: tuple[MarkedContentOp, ...] | None = None

    def __repr__(self) -> str:
        return f"MemoryNode(role={self.model.role.value!r})"

    @property
    def role_type(self) -> RoleType:
        return self.model.role

    def child_count(self) -> int:
        return len(self._children)

    def child_at(self, index: int) -> "MemoryNode":
        return self._children[index]

    def page_ref(self) -> PageRef | None:
        return self.model.page

    def raw_id(self) -> str | None:
        return self.model.id

    def raw_title(self) -> str | None:
        return self.model.title

    def raw_language(self) -> str | None:
        return self.model.language

    def raw_expanded_abbr(self) -> str | None:
        return self.model.expanded_abbr

    def raw_alt_text(self) -> str | None:
        return self.model.alt_text

    def raw_actual_text(self) -> str | None:
        return self.model.actual_text

    def is_content(self) -> bool:
        return self.model.role == RoleType.MCID

    def is_inline(self) -> bool:
        return element_class(self.model.role) == ElementClass.INLINE

    def is_block(self) -> bool:
        return element_class(self.model.role) == ElementClass.BLOCK

    def marked_content_ops(self) -> Sequence[MarkedContentOp]:
        if not self.is_content():
            raise NotContentError(self.model.role)
        if self._ops is None:
            self._ops = tuple(op for item in self.model.ops for op in item.to_ops())
        return self._ops

    def _own_text(self) -> str | None:
        if self.model.text is not None:
            return self.model.text
        if not self.is_content():
            return None
        text = "".join(
            _RAW_TEXT_MAP.map_unicode(op.codepoint)
            for op in self.marked_content_ops()
            if isinstance(op, CharOp)
        )
        return text or None

    def plain_text(self, recursive: bool) -> str | None:
        own = self._own_text()
        if not recursive:
            return own

        pieces = [own] if own is not None else []
        for child in self._children:
            child_text = child.plain_text(True)
            if child_text is not None:
                pieces.append(child_text)
        return "".join(pieces) if pieces else None


class MemoryDocument:
    """``StructureDocument`` implementation over a ``StructTreeModel``."""

    def __init__(self, tree: StructTreeModel) -> None:
        self.tree = tree
        self._roots = [MemoryNode(root) for root in tree.roots or []]

    def __repr__(self) -> str:
        return (
            f"MemoryDocument(pages={self.tree.page_count}, "
            f"roots={self.root_count()})"
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MemoryDocument":
        """Validate ``data`` and build a document from it.

        Raises:
            pydantic.ValidationError: If the data does not describe a tree
        """
        return cls(StructTreeModel.model_validate(data))

    def has_structure_tree(self) -> bool:
        return self.tree.roots is not None

    def root_count(self) -> int:
        return len(self._roots)

    def root_at(self, index: int) -> MemoryNode:
        return self._roots[index]

    def resolve_page_index(self, page_ref: PageRef) -> int:
        if not isinstance(page_ref, int) or isinstance(page_ref, bool):
            raise PageReferenceError(page_ref, "expected a page number")
        if not 1 <= page_ref <= self.tree.page_count:
            logger.debug(f"Page {page_ref} is outside 1..{self.tree.page_count}")
            return 0
        return page_ref


def load_document(path: Path) -> MemoryDocument:
    """Load an in-memory document from a YAML or JSON file.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` file

    Returns:
        The loaded document

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file cannot be parsed or fails validation
    """
    if not path.is_file():
        raise FileNotFoundError(
            str(path), "Provide a YAML or JSON structure tree description."
        )

    raw_text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(raw_text)
        else:
            data = yaml.safe_load(raw_text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(str(path), f"Cannot parse document description: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(str(path), "Top-level value must be a mapping")

    try:
        document = MemoryDocument.from_dict(data)
    except PydanticValidationError as e:
        raise ConfigError(str(path), "\n".join(flatten_pydantic_errors(e))) from e

    logger.debug(f"Loaded in-memory document from {path}: {document!r}")
    return document
