"""Structure role tags and their semantic classification.

``RoleType`` is the closed set of raw role tags a structure tree producer may
hand us (the standard tagged-PDF structure types plus the two content markers
``MCID`` and ``OBJR``). ``StructureElementKind`` is the public semantic kind
exposed to callers. Every role tag maps to exactly one distinct kind.

Custom role names are the producer's job to resolve (through the document's
role map) before they reach this module; anything that still is not a
``RoleType`` is a contract violation.
"""

from enum import Enum

from tagview.lib.errors import UnknownRoleTypeError


class RoleType(str, Enum):
    """Raw role tag of a structure node as defined by the tree format."""

    UNKNOWN = "Unknown"
    MCID = "MCID"
    OBJR = "OBJR"
    DOCUMENT = "Document"
    PART = "Part"
    ART = "Art"
    SECT = "Sect"
    DIV = "Div"
    SPAN = "Span"
    QUOTE = "Quote"
    NOTE = "Note"
    REFERENCE = "Reference"
    BIB_ENTRY = "BibEntry"
    CODE = "Code"
    LINK = "Link"
    ANNOT = "Annot"
    RUBY = "Ruby"
    WARICHU = "Warichu"
    BLOCK_QUOTE = "BlockQuote"
    CAPTION = "Caption"
    NON_STRUCT = "NonStruct"
    TOC = "TOC"
    TOCI = "TOCI"
    INDEX = "Index"
    PRIVATE = "Private"
    P = "P"
    H = "H"
    H1 = "H1"
    H2 = "H2"
    H3 = "H3"
    H4 = "H4"
    H5 = "H5"
    H6 = "H6"
    L = "L"
    LI = "LI"
    LBL = "Lbl"
    L_BODY = "LBody"
    TABLE = "Table"
    TR = "TR"
    TH = "TH"
    TD = "TD"
    T_HEAD = "THead"
    T_FOOT = "TFoot"
    T_BODY = "TBody"
    FIGURE = "Figure"
    FORMULA = "Formula"
    FORM = "Form"

    @classmethod
    def from_name(cls, name: str) -> "RoleType | None":
        """Look up a role tag by its name in the tree format.

        Args:
            name: Tag name without a leading slash (e.g. ``"H2"``)

        Returns:
            The matching RoleType, or None for names outside the standard set.
        """
        try:
            return cls(name)
        except ValueError:
            return None


class StructureElementKind(str, Enum):
    """Semantic kind of a structure element."""

    UNKNOWN = "unknown"
    CONTENT = "content"
    OBJECT_REFERENCE = "object_reference"
    DOCUMENT = "document"
    PART = "part"
    ARTICLE = "article"
    SECTION = "section"
    DIV = "div"
    SPAN = "span"
    QUOTE = "quote"
    NOTE = "note"
    REFERENCE = "reference"
    BIBENTRY = "bibentry"
    CODE = "code"
    LINK = "link"
    ANNOT = "annot"
    RUBY = "ruby"
    WARICHU = "warichu"
    BLOCKQUOTE = "blockquote"
    CAPTION = "caption"
    NONSTRUCT = "nonstruct"
    TOC = "toc"
    TOC_ITEM = "toc_item"
    INDEX = "index"
    PRIVATE = "private"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    HEADING_4 = "heading_4"
    HEADING_5 = "heading_5"
    HEADING_6 = "heading_6"
    LIST = "list"
    LIST_ITEM = "list_item"
    LIST_LABEL = "list_label"
    LIST_BODY = "list_body"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_HEADING = "table_heading"
    TABLE_DATA = "table_data"
    TABLE_HEADER = "table_header"
    TABLE_FOOTER = "table_footer"
    TABLE_BODY = "table_body"
    FIGURE = "figure"
    FORMULA = "formula"
    FORM = "form"


class ElementClass(str, Enum):
    """Layout class of a role tag, used to answer inline/block queries."""

    GROUPING = "grouping"
    BLOCK = "block"
    INLINE = "inline"
    LIST = "list"
    TABLE = "table"
    ILLUSTRATION = "illustration"
    CONTENT = "content"


_KIND_BY_ROLE: dict[RoleType, StructureElementKind] = {
    RoleType.UNKNOWN: StructureElementKind.UNKNOWN,
    RoleType.MCID: StructureElementKind.CONTENT,
    RoleType.OBJR: StructureElementKind.OBJECT_REFERENCE,
    RoleType.DOCUMENT: StructureElementKind.DOCUMENT,
    RoleType.PART: StructureElementKind.PART,
    RoleType.ART: StructureElementKind.ARTICLE,
    RoleType.SECT: StructureElementKind.SECTION,
    RoleType.DIV: StructureElementKind.DIV,
    RoleType.SPAN: StructureElementKind.SPAN,
    RoleType.QUOTE: StructureElementKind.QUOTE,
    RoleType.NOTE: StructureElementKind.NOTE,
    RoleType.REFERENCE: StructureElementKind.REFERENCE,
    RoleType.BIB_ENTRY: StructureElementKind.BIBENTRY,
    RoleType.CODE: StructureElementKind.CODE,
    RoleType.LINK: StructureElementKind.LINK,
    RoleType.ANNOT: StructureElementKind.ANNOT,
    RoleType.RUBY: StructureElementKind.RUBY,
    RoleType.WARICHU: StructureElementKind.WARICHU,
    RoleType.BLOCK_QUOTE: StructureElementKind.BLOCKQUOTE,
    RoleType.CAPTION: StructureElementKind.CAPTION,
    RoleType.NON_STRUCT: StructureElementKind.NONSTRUCT,
    RoleType.TOC: StructureElementKind.TOC,
    RoleType.TOCI: StructureElementKind.TOC_ITEM,
    RoleType.INDEX: StructureElementKind.INDEX,
    RoleType.PRIVATE: StructureElementKind.PRIVATE,
    RoleType.P: StructureElementKind.PARAGRAPH,
    RoleType.H: StructureElementKind.HEADING,
    RoleType.H1: StructureElementKind.HEADING_1,
    RoleType.H2: StructureElementKind.HEADING_2,
    RoleType.H3: StructureElementKind.HEADING_3,
    RoleType.H4: StructureElementKind.HEADING_4,
    RoleType.H5: StructureElementKind.HEADING_5,
    RoleType.H6: StructureElementKind.HEADING_6,
    RoleType.L: StructureElementKind.LIST,
    RoleType.LI: StructureElementKind.LIST_ITEM,
    RoleType.LBL: StructureElementKind.LIST_LABEL,
    RoleType.L_BODY: StructureElementKind.LIST_BODY,
    RoleType.TABLE: StructureElementKind.TABLE,
    RoleType.TR: StructureElementKind.TABLE_ROW,
    RoleType.TH: StructureElementKind.TABLE_HEADING,
    RoleType.TD: StructureElementKind.TABLE_DATA,
    RoleType.T_HEAD: StructureElementKind.TABLE_HEADER,
    RoleType.T_FOOT: StructureElementKind.TABLE_FOOTER,
    RoleType.T_BODY: StructureElementKind.TABLE_BODY,
    RoleType.FIGURE: StructureElementKind.FIGURE,
    RoleType.FORMULA: StructureElementKind.FORMULA,
    RoleType.FORM: StructureElementKind.FORM,
}

_BLOCK_ROLES = frozenset(
    {
        RoleType.P,
        RoleType.H,
        RoleType.H1,
        RoleType.H2,
        RoleType.H3,
        RoleType.H4,
        RoleType.H5,
        RoleType.H6,
        RoleType.L,
        RoleType.TABLE,
    }
)
_INLINE_ROLES = frozenset(
    {
        RoleType.SPAN,
        RoleType.QUOTE,
        RoleType.NOTE,
        RoleType.REFERENCE,
        RoleType.BIB_ENTRY,
        RoleType.CODE,
        RoleType.LINK,
        RoleType.ANNOT,
        RoleType.RUBY,
        RoleType.WARICHU,
    }
)
_LIST_ROLES = frozenset({RoleType.LI, RoleType.LBL, RoleType.L_BODY})
_TABLE_ROLES = frozenset(
    {
        RoleType.TR,
        RoleType.TH,
        RoleType.TD,
        RoleType.T_HEAD,
        RoleType.T_FOOT,
        RoleType.T_BODY,
    }
)
_ILLUSTRATION_ROLES = frozenset({RoleType.FIGURE, RoleType.FORMULA, RoleType.FORM})


def classify(role_type: RoleType) -> StructureElementKind:
    """Map a raw role tag to its semantic kind.

    Args:
        role_type: Role tag of a structure node

    Returns:
        The StructureElementKind for the tag.

    Raises:
        UnknownRoleTypeError: If the tag is not part of the known set. This
            means the tree format grew a tag this module does not know yet.
    """
    try:
        return _KIND_BY_ROLE[role_type]
    except (KeyError, TypeError):
        raise UnknownRoleTypeError(role_type) from None


def element_class(role_type: RoleType) -> ElementClass:
    """Return the layout class of a role tag.

    ``Unknown`` and ``OBJR`` count as grouping elements, ``MCID`` as content.

    Raises:
        UnknownRoleTypeError: If the tag is not part of the known set.
    """
    if role_type not in _KIND_BY_ROLE:
        raise UnknownRoleTypeError(role_type)
    if role_type == RoleType.MCID:
        return ElementClass.CONTENT
    if role_type in _BLOCK_ROLES:
        return ElementClass.BLOCK
    if role_type in _INLINE_ROLES:
        return ElementClass.INLINE
    if role_type in _LIST_ROLES:
        return ElementClass.LIST
    if role_type in _TABLE_ROLES:
        return ElementClass.TABLE
    if role_type in _ILLUSTRATION_ROLES:
        return ElementClass.ILLUSTRATION
    return ElementClass.GROUPING
