"""Custom exception hierarchy for inlined-copy configuration and expansion."""

from enum import Enum


class InlinedCopyError(Exception):
    """Base exception for all inlined-copy errors.

    All inlined-copy specific exceptions inherit from this class, enabling
    centralized exception handling at the command boundary.
    """

    pass


class ConfigError(InlinedCopyError):
    """Exception raised for configuration errors.

    This exception is raised when configuration loading or parsing fails.
    It includes field-specific information to help users identify and fix
    configuration issues.

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


class ErrorKind(str, Enum):
    """Kinds of failure that can occur while expanding a reference.

    RECURSION_DEPTH_EXCEEDED names the depth limit for completeness but is
    never raised: a file at the limit is included without expanding its
    references, which is not a failure.
    """

    MALFORMED_REFERENCE = "malformed_reference"
    NOT_FOUND = "not_found"
    HEADING_NOT_FOUND = "heading_not_found"
    OVERSIZED_FILE = "oversized_file"
    CIRCULAR_REFERENCE = "circular_reference"
    RECURSION_DEPTH_EXCEEDED = "recursion_depth_exceeded"
    READ_FAILED = "read_failed"
    UNEXPECTED = "unexpected"


class ExpansionError(InlinedCopyError):
    """Exception raised when a file reference cannot be expanded.

    A single error type covers every failure kind; the expander inspects
    ``kind`` to decide whether the failure is rendered inline for one
    reference or escalated for the whole call.

    Attributes:
        kind: The failure kind
        message: Human-readable description, also used as the inline marker text
        reference: Original ``![[...]]`` token text, when the failure belongs
            to a single reference
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        reference: str | None = None,
    ) -> None:
        """Initialize ExpansionError.

        Args:
            kind: Failure kind
            message: Descriptive error message
            reference: Original reference token, if any
        """
        self.kind = kind
        self.message = message
        self.reference = reference
        super().__init__(message)

    @property
    def is_recoverable(self) -> bool:
        """Whether the failure stays local to one reference."""
        return self.kind is not ErrorKind.UNEXPECTED
