"""Validation utilities for inlined-copy configuration."""

from pydantic import ValidationError as PydanticValidationError


def flatten_pydantic_errors(exc: PydanticValidationError) -> list[str]:
    """Flatten a Pydantic ValidationError into readable messages.

    Args:
        exc: Pydantic ValidationError exception

    Returns:
        One message per field error, each naming the dotted field path

    Example:
        >>> from inlined_copy.models.config import ExpansionConfig
        >>> try:
        ...     ExpansionConfig(max_recursion_depth=-1)
        ... except PydanticValidationError as e:
        ...     flatten_pydantic_errors(e)
        ["Field 'max_recursion_depth': Input should be greater than or equal to 0 (received: -1)"]
    """
    errors: list[str] = []

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(item) for item in loc) if loc else "unknown"
        msg = error.get("msg", "Unknown error")

        if "input" in error and error.get("type") != "extra_forbidden":
            errors.append(f"Field '{field_path}': {msg} (received: {error['input']!r})")
        else:
            errors.append(f"Field '{field_path}': {msg}")

    return errors if errors else ["Validation failed with unknown error"]
