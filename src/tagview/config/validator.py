"""Readable messages for TagView configuration and tree description errors.

Error locations are rendered as paths into the YAML/JSON input, with list
indices in brackets and the ``op`` tag of a marked-content operation in
angle brackets::

    roots[0].ops[2]<color>.rgb[0]: Input should be less than or equal to 255 (got 300)
"""

from collections.abc import Sequence

from pydantic import ValidationError as PydanticValidationError

# List fields whose items are tagged unions; pydantic puts the tag after the index
TAGGED_LIST_FIELDS = frozenset({"ops"})

TOP_LEVEL = "(top level)"

_VALUE_ERROR_PREFIX = "Value error, "


def format_location(loc: Sequence[str | int]) -> str:
    """Render a pydantic error location as a path into the input document.

    Args:
        loc: Location tuple of one entry of ``ValidationError.errors()``

    Returns:
        Path such as ``roots[0].ops[2]<font>.name``, or ``(top level)`` for
        errors raised by the outermost model itself.
    """
    path = ""
    for position, item in enumerate(loc):
        if isinstance(item, int):
            path += f"[{item}]"
        elif (
            position >= 2
            and isinstance(loc[position - 1], int)
            and loc[position - 2] in TAGGED_LIST_FIELDS
        ):
            path += f"<{item}>"
        else:
            path += f".{item}" if path else item
    return path or TOP_LEVEL


def flatten_pydantic_errors(exc: PydanticValidationError) -> list[str]:
    """Turn a validation failure into ``path: message`` lines.

    Validator messages lose pydantic's ``Value error,`` prefix, and scalar
    inputs are echoed after the message.

    Args:
        exc: Pydantic ValidationError exception

    Returns:
        One line per error, in pydantic's order
    """
    messages: list[str] = []
    for error in exc.errors():
        message = error["msg"].removeprefix(_VALUE_ERROR_PREFIX)
        value = error.get("input")
        if isinstance(value, str | int | float) and error["type"] != "missing":
            message += f" (got {value!r})"
        messages.append(f"{format_location(error['loc'])}: {message}")
    return messages
