"""Attributed-run segmentation of marked-content operations.

The segmenter folds the ordered operations of one content node into text
spans. Each span is a maximal run of text with identical rendering
attributes, so consumers such as accessible-text renderers never have to
re-derive attribute boundaries themselves.

Accumulated state: a text buffer, a font-name buffer, a link-target buffer,
the attribute bitmask and the current color. Character operations only
append text. Attribute operations update the bitmask; whenever the bitmask
actually changes, the pending text is flushed with the attributes it was
written under before the new ones take effect.

Quirks that are kept on purpose because they are observable:

- A color whose packed value is zero (black) is treated as "no color".
- A color change that leaves the bitmask untouched (red to blue) does not
  flush, so the pending text takes the newer color.
- Font names given while a font is already active are appended to the
  buffered name rather than replacing it. Clearing the font only drops the
  bit; the buffered name survives until a flush emits text.
"""

from collections.abc import Iterable

from tagview.lib.logging_config import get_logger
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
from tagview.models.text_span import TextSpan, TextSpanFlags
from tagview.structure.encoding import UnicodeMap

logger = get_logger(__name__)

_STYLE_BITS = (
    (FontFlags.BOLD, TextSpanFlags.BOLD),
    (FontFlags.FIXED_WIDTH, TextSpanFlags.FIXED_WIDTH),
    (FontFlags.ITALIC, TextSpanFlags.ITALIC),
)


class SpanBuilder:
    """Stateful fold from marked-content operations to text spans.

    A builder is single-use and single-owner: feed it with ``process`` or
    ``process_all`` and collect the result with ``end``.
    """

    def __init__(self, unicode_map: UnicodeMap | None = None) -> None:
        self._map = unicode_map if unicode_map is not None else UnicodeMap()
        self._text: list[str] = []
        self._font: list[str] = []
        self._link: list[str] = []
        # LINK is never stored here; it is derived from the link buffer
        self._flags = TextSpanFlags.NONE
        self._color: RGBColor | None = None
        self._spans: list[TextSpan] = []

    def process_all(self, ops: Iterable[MarkedContentOp]) -> None:
        for op in ops:
            self.process(op)

    def process(self, op: MarkedContentOp) -> None:
        """Apply a single operation to the accumulated state."""
        match op:
            case CharOp(codepoint=codepoint):
                self._text.append(self._map.map_unicode(codepoint))
            case FlagsOp(flags=font_flags):
                flags = self._flags
                for font_bit, span_bit in _STYLE_BITS:
                    if font_bit in font_flags:
                        flags |= span_bit
                    else:
                        flags &= ~span_bit
                self._transition(flags)
            case ColorOp(color=color):
                if color is not None and color.pixel:
                    self._transition(self._flags | TextSpanFlags.COLOR)
                    self._color = color
                else:
                    self._transition(self._flags & ~TextSpanFlags.COLOR)
                    self._color = None
            case FontNameOp(name=name):
                if name:
                    self._transition(self._flags | TextSpanFlags.FONT)
                    self._font.append(name)
                else:
                    self._transition(self._flags & ~TextSpanFlags.FONT)
            case LinkOp(target=target):
                before = self._effective_flags()
                if target:
                    if not before & TextSpanFlags.LINK:
                        self._flush()
                    self._link.append(target)
                else:
                    if before & TextSpanFlags.LINK:
                        self._flush()
                    self._link.clear()
            case _:
                raise TypeError(f"Unsupported marked-content operation: {op!r}")

    def end(self) -> list[TextSpan]:
        """Flush pending text and hand over the spans built so far."""
        self._flush()
        spans, self._spans = self._spans, []
        return spans

    def _effective_flags(self) -> TextSpanFlags:
        if self._link:
            return self._flags | TextSpanFlags.LINK
        return self._flags

    def _transition(self, flags: TextSpanFlags) -> None:
        if flags != self._flags:
            self._flush()
            self._flags = flags

    def _flush(self) -> None:
        # Without text, no span is emitted and attributes carry forward
        text = "".join(self._text)
        if text:
            flags = self._effective_flags()
            font_name = "".join(self._font) if flags & TextSpanFlags.FONT else ""
            self._spans.append(
                TextSpan(
                    text=text,
                    flags=flags,
                    font_name=font_name or None,
                    link_target="".join(self._link) if self._link else None,
                    color=self._color if flags & TextSpanFlags.COLOR else None,
                )
            )
            self._text.clear()
            self._font.clear()

        self._link.clear()


def segment(
    ops: Iterable[MarkedContentOp],
    unicode_map: UnicodeMap | None = None,
) -> list[TextSpan]:
    """Split marked-content operations into attributed text spans.

    Args:
        ops: Ordered operations of one content node
        unicode_map: Output encoding filter for characters, UTF-8 by default

    Returns:
        Spans in content order; empty when the operations carry no text.
    """
    builder = SpanBuilder(unicode_map)
    builder.process_all(ops)
    spans = builder.end()
    logger.debug(f"Segmented marked content into {len(spans)} span(s)")
    return spans
