"""Result models exchanged between the expander and its collaborators.

Both models are success-or-failure unions: exactly one of the payload field
and ``error`` is set.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FileResult(BaseModel):
    """Outcome of resolving a referenced path to a file on disk."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str | None = Field(None, description="Resolved absolute file path")
    error: str | None = Field(None, description="Reason the path could not be resolved")

    @model_validator(mode="after")
    def validate_variant(self) -> "FileResult":
        """Ensure exactly one of path and error is set."""
        if (self.path is None) == (self.error is None):
            raise ValueError("Exactly one of 'path' or 'error' must be set")
        return self

    @property
    def success(self) -> bool:
        """True when the path was resolved."""
        return self.error is None

    @classmethod
    def succeeded(cls, path: str) -> "FileResult":
        """Create a successful result carrying the resolved path."""
        return cls(path=path)

    @classmethod
    def failed(cls, error: str) -> "FileResult":
        """Create a failed result carrying the error message."""
        return cls(error=error)


class ExpandResult(BaseModel):
    """Outcome of expanding every reference in a text."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    content: str | None = Field(None, description="Expanded text")
    error: str | None = Field(None, description="Reason the expansion failed")

    @model_validator(mode="after")
    def validate_variant(self) -> "ExpandResult":
        """Ensure exactly one of content and error is set."""
        if (self.content is None) == (self.error is None):
            raise ValueError("Exactly one of 'content' or 'error' must be set")
        return self

    @property
    def success(self) -> bool:
        """True when expansion completed."""
        return self.error is None

    @classmethod
    def succeeded(cls, content: str) -> "ExpandResult":
        """Create a successful result carrying the expanded text."""
        return cls(content=content)

    @classmethod
    def failed(cls, error: str) -> "ExpandResult":
        """Create a failed result carrying the error message."""
        return cls(error=error)
