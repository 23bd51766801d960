"""Pydantic model for TagView runtime configuration."""

import codecs

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tagview.config.defaults import DEFAULT_TEXT_ENCODING


class TagViewConfig(BaseModel):
    """Runtime settings shared by the CLI and library callers.

    Attributes:
        text_encoding: Output encoding used when mapping content codepoints
        verbose: Enable debug logging
        quiet: Only log warnings and errors
    """

    model_config = ConfigDict(extra="forbid")

    text_encoding: str = Field(
        default=DEFAULT_TEXT_ENCODING,
        description="Codec name for extracted text (e.g. utf-8, latin-1)",
    )
    verbose: bool = False
    quiet: bool = False

    @field_validator("text_encoding")
    @classmethod
    def validate_text_encoding(cls, value: str) -> str:
        """Ensure the encoding is a codec Python knows about."""
        try:
            return codecs.lookup(value).name
        except LookupError as e:
            raise ValueError(f"Unknown text encoding '{value}'") from e
