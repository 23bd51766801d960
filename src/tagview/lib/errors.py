"""Custom exception hierarchy for TagView configuration and structure access."""


class TagViewError(Exception):
    """Base exception for all TagView errors.

    All TagView-specific exceptions inherit from this class, enabling
    centralized exception handling in the CLI and in embedding applications.
    """

    pass


class ConfigError(TagViewError):
    """Exception raised for configuration errors.

    This exception is raised when configuration or document fixture loading
    fails. It includes field-specific information to help users identify
    and fix the offending entry.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class FileNotFoundError(TagViewError):
    """Exception raised when an input document or config file is not found.

    Attributes:
        path: Path to the file that was not found
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str) -> None:
        """Initialize FileNotFoundError with path and message.

        Args:
            path: Path to the file that was not found
            message: Descriptive error message, optionally with suggestions
        """
        self.path = path
        self.message = message
        super().__init__(f"File not found: {path}\n{message}")


class DocumentLoadError(TagViewError):
    """Exception raised when a document cannot be opened or parsed.

    Attributes:
        path: Path of the document that failed to load
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str) -> None:
        """Create a load error for the given document path."""
        self.path = path
        self.message = message
        super().__init__(f"Failed to load document '{path}': {message}")


class ContractViolationError(TagViewError):
    """Exception raised when a caller or the tree producer breaks a contract.

    These are programming errors, not runtime conditions. They are raised
    instead of returning a sentinel that could be mistaken for valid data,
    and should not be caught except at the outermost layer.
    """

    pass


class UnknownRoleTypeError(ContractViolationError):
    """Error raised when a role tag falls outside the known closed set.

    Attributes:
        role_type: The offending role tag
    """

    def __init__(self, role_type: object) -> None:
        """Create an error for an unclassifiable role tag."""
        self.role_type = role_type
        super().__init__(
            f"Role type {role_type!r} is not part of the known structure tree "
            "tag set"
        )


class CursorOutOfRangeError(ContractViolationError):
    """Error raised when a cursor is used past the end of its level.

    Attributes:
        index: Cursor index at the time of the call
        count: Number of siblings at the cursor's level
    """

    def __init__(self, index: int, count: int) -> None:
        """Create an out-of-range error with cursor position details."""
        self.index = index
        self.count = count
        super().__init__(
            f"Cursor index {index} is out of range for a level with {count} "
            "element(s); stop iterating once advance() returns False"
        )


class NotContentError(ContractViolationError):
    """Error raised when content-only data is requested from a non-content node.

    Attributes:
        role_type: Role tag of the node that was queried
    """

    def __init__(self, role_type: object) -> None:
        """Create an error naming the non-content node's role."""
        self.role_type = role_type
        super().__init__(
            f"Marked-content operations requested from non-content node "
            f"{role_type!r}; check is_content() first"
        )


class PageReferenceError(ContractViolationError):
    """Error raised when a page reference is not of the type a backend accepts.

    Attributes:
        page_ref: The rejected page reference
    """

    def __init__(self, page_ref: object, message: str) -> None:
        """Create an error for a malformed page reference."""
        self.page_ref = page_ref
        self.message = message
        super().__init__(f"Page reference {page_ref!r} is invalid: {message}")
