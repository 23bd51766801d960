"""Text span model produced by the run segmenter."""

from dataclasses import dataclass
from enum import IntFlag
from typing import Any

from tagview.models.marked_content import RGBColor


class TextSpanFlags(IntFlag):
    """Rendering attribute bits of a text span."""

    NONE = 0
    FIXED_WIDTH = 1 << 0
    SERIF_FONT = 1 << 1
    ITALIC = 1 << 2
    BOLD = 1 << 3
    LINK = 1 << 4
    COLOR = 1 << 5
    FONT = 1 << 6


@dataclass(frozen=True, slots=True)
class TextSpan:
    """A maximal run of text sharing the same rendering attributes.

    Attributes:
        text: The run's text, never empty
        flags: Attribute bits for the whole run
        font_name: Font name, only present when ``FONT`` is set
        link_target: Link target, only present when ``LINK`` is set
        color: Fill color, only present when ``COLOR`` is set
    """

    text: str
    flags: TextSpanFlags = TextSpanFlags.NONE
    font_name: str | None = None
    link_target: str | None = None
    color: RGBColor | None = None

    @property
    def is_fixed_width(self) -> bool:
        return bool(self.flags & TextSpanFlags.FIXED_WIDTH)

    @property
    def is_serif_font(self) -> bool:
        return bool(self.flags & TextSpanFlags.SERIF_FONT)

    @property
    def is_italic(self) -> bool:
        return bool(self.flags & TextSpanFlags.ITALIC)

    @property
    def is_bold(self) -> bool:
        return bool(self.flags & TextSpanFlags.BOLD)

    @property
    def is_link(self) -> bool:
        return bool(self.flags & TextSpanFlags.LINK)

    @property
    def has_color(self) -> bool:
        return bool(self.flags & TextSpanFlags.COLOR)

    @property
    def has_font_name(self) -> bool:
        return bool(self.flags & TextSpanFlags.FONT)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the span for JSON output.

        Returns:
            Dictionary with the text, the names of the set flags, and the
            optional font name, link target and ``#rrggbb`` color.
        """
        flag_names = [
            flag.name.lower()
            for flag in TextSpanFlags
            if flag and flag.name and flag in self.flags
        ]
        return {
            "text": self.text,
            "flags": flag_names,
            "font_name": self.font_name,
            "link_target": self.link_target,
            "color": self.color.to_hex() if self.color is not None else None,
        }
