"""Transcoding of external strings and codepoints into output text.

The structure tree hands us characters as bare codepoints and scalar
attributes as PDF text strings. ``UnicodeMap`` filters codepoints through the
configured output encoding; ``decode_text_string`` turns raw PDF strings into
``str`` using pypdf's text-string rules.
"""

import codecs

from pypdf.generic import TextStringObject, create_string_object

from tagview.config.defaults import DEFAULT_TEXT_ENCODING

_MAX_CODEPOINT = 0x10FFFF
_SURROGATES = range(0xD800, 0xE000)


class UnicodeMap:
    """Maps codepoints to text representable in an output encoding.

    Codepoints the encoding cannot represent, and values that are not
    Unicode scalar values, map to the empty string rather than raising.

    Attributes:
        encoding: Canonical codec name of the output encoding
    """

    def __init__(self, encoding: str = DEFAULT_TEXT_ENCODING) -> None:
        """Create a map for the given encoding.

        Args:
            encoding: Any codec name known to Python (e.g. ``"utf-8"``)

        Raises:
            LookupError: If the encoding is unknown
        """
        self.encoding = codecs.lookup(encoding).name
        self._cache: dict[int, str] = {}

    def map_unicode(self, codepoint: int) -> str:
        """Return the text for ``codepoint``, or ``""`` if it is unmappable."""
        cached = self._cache.get(codepoint)
        if cached is not None:
            return cached

        text = ""
        if 0 <= codepoint <= _MAX_CODEPOINT and codepoint not in _SURROGATES:
            candidate = chr(codepoint)
            try:
                candidate.encode(self.encoding)
            except UnicodeEncodeError:
                pass
            else:
                text = candidate

        self._cache[codepoint] = text
        return text

    def __repr__(self) -> str:
        return f"UnicodeMap({self.encoding!r})"


def decode_text_string(raw: str | bytes | None) -> str | None:
    """Decode an externally encoded string attribute.

    ``bytes`` are treated as a PDF text string: UTF-16BE or UTF-8 when a byte
    order mark is present, PDFDocEncoding otherwise. Strings that are not
    valid text strings fall back to Latin-1 so no byte is lost.

    Args:
        raw: Raw attribute value, already-decoded text, or None

    Returns:
        The decoded text, or None when the attribute is undefined.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        return str(raw)

    data = bytes(raw)
    # pypdf only sniffs UTF-16 byte order marks
    if data.startswith(codecs.BOM_UTF8):
        return data[len(codecs.BOM_UTF8) :].decode("utf-8", errors="replace")

    decoded = create_string_object(data)
    if isinstance(decoded, TextStringObject):
        return str(decoded)
    return data.decode("latin-1")
