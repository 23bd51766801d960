"""Data models for TagView: role tags, marked-content operations, text spans."""

from tagview.models.kinds import (
    ElementClass,
    RoleType,
    StructureElementKind,
    classify,
    element_class,
)
from tagview.models.marked_content import (
    CharOp,
    ColorOp,
    FlagsOp,
    FontFlags,
    FontNameOp,
    LinkOp,
    MarkedContentOp,
    RGBColor,
    chars,
)
from tagview.models.text_span import TextSpan, TextSpanFlags

__all__ = [
    "CharOp",
    "ColorOp",
    "ElementClass",
    "FlagsOp",
    "FontFlags",
    "FontNameOp",
    "LinkOp",
    "MarkedContentOp",
    "RGBColor",
    "RoleType",
    "StructureElementKind",
    "TextSpan",
    "TextSpanFlags",
    "chars",
    "classify",
    "element_class",
]
