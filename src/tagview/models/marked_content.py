"""Marked-content operations attached to content-bearing structure nodes.

A content node carries an ordered, finite sequence of these operations: one
per character, interleaved with changes to the active rendering attributes.
They are produced by the document parser and consumed by the run segmenter.
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import NamedTuple, TypeAlias


class FontFlags(IntFlag):
    """Font style bits carried by a ``FlagsOp``."""

    NONE = 0
    BOLD = 1 << 0
    FIXED_WIDTH = 1 << 1
    ITALIC = 1 << 2


class RGBColor(NamedTuple):
    """An RGB color with 0-255 components."""

    red: int
    green: int
    blue: int

    @property
    def pixel(self) -> int:
        """Packed ``0x00RRGGBB`` value."""
        return (self.red << 16) | (self.green << 8) | self.blue

    @classmethod
    def from_pixel(cls, pixel: int) -> "RGBColor":
        """Unpack a ``0x00RRGGBB`` value."""
        return cls((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF)

    def to_hex(self) -> str:
        """Return the color as ``#rrggbb``."""
        return f"#{self.pixel:06x}"


@dataclass(frozen=True, slots=True)
class CharOp:
    """A single character, as a Unicode codepoint."""

    codepoint: int


@dataclass(frozen=True, slots=True)
class FlagsOp:
    """Sets the bold, fixed-width and italic state all at once."""

    flags: FontFlags = FontFlags.NONE


@dataclass(frozen=True, slots=True)
class ColorOp:
    """Sets the fill color, or clears it when ``color`` is None."""

    color: RGBColor | None = None


@dataclass(frozen=True, slots=True)
class FontNameOp:
    """Sets the font name, or clears it when ``name`` is None or empty."""

    name: str | None = None


@dataclass(frozen=True, slots=True)
class LinkOp:
    """Sets the link target for the text that follows, or clears it."""

    target: str | None = None


MarkedContentOp: TypeAlias = CharOp | FlagsOp | ColorOp | FontNameOp | LinkOp


def chars(text: str) -> list[CharOp]:
    """Expand a string into one ``CharOp`` per codepoint."""
    return [CharOp(ord(ch)) for ch in text]
