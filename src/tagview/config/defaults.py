"""Default configuration values for TagView."""

# Output encoding for extracted text; codepoints it cannot represent are dropped
DEFAULT_TEXT_ENCODING = "utf-8"

DEFAULT_CONFIG: dict[str, str | bool] = {
    "text_encoding": DEFAULT_TEXT_ENCODING,
    "verbose": False,
    "quiet": False,
}

# Directory under the user's home holding the user-level config file
USER_CONFIG_DIR = ".tagview"
CONFIG_BASENAME = "config"
PROJECT_CONFIG_BASENAME = "tagview"

# Document fixtures accepted by the in-memory backend
DOCUMENT_FIXTURE_SUFFIXES = (".yaml", ".yml", ".json")
PDF_SUFFIXES = (".pdf",)
