"""Parser for inline file references.

References take one of three shapes::

    ![[notes/file.md]]                  whole file
    ![[notes/file.md#Heading]]          one section (heading text or custom id)
    ![[notes/file.md#Parent#Child]]     nested section path

A heading that itself contains ``"# "`` (for example ``Section # 1``) is kept
as a single heading instead of being split into a path. The trade-off is that
a nested path whose segments contain ``"# "`` cannot be expressed.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

# Token discovery over whole documents, applied left to right without overlap.
REFERENCE_PATTERN = re.compile(r"!\[\[(.*?)(?:#(.*?))?\]\]")

_FIRST_REFERENCE = re.compile(r"!\[\[(.*?)\]\]")


class ReferenceType(Enum):
    """Classification of a parsed reference."""

    FILE_ONLY = "file_only"
    SINGLE_HEADING = "single_heading"
    NESTED_HEADING = "nested_heading"


@dataclass(frozen=True)
class FileReference:
    """A parsed ``![[...]]`` reference.

    Attributes:
        type: Reference classification
        file_path: Referenced path, trimmed; empty for malformed references
        heading_path: Heading names or ids, outermost first; None for
            file-only references
        original_text: Exact text the reference was parsed from
    """

    type: ReferenceType
    file_path: str
    heading_path: tuple[str, ...] | None
    original_text: str

    @property
    def is_malformed(self) -> bool:
        """True when no file path could be extracted."""
        return not self.file_path


def parse_reference(reference: str) -> FileReference:
    """Parse the first ``![[...]]`` span found in ``reference``.

    Never raises; input without a reference yields a file-only result with an
    empty path.

    Args:
        reference: Text containing a reference token

    Returns:
        Parsed FileReference
    """
    match = _FIRST_REFERENCE.search(reference)
    if not match:
        return FileReference(ReferenceType.FILE_ONLY, "", None, reference)

    inner = match.group(1)
    original = match.group(0)

    file_part, sep, heading_content = inner.partition("#")
    file_path = file_part.strip()
    if not sep:
        return FileReference(ReferenceType.FILE_ONLY, file_path, None, original)

    headings = _split_headings(heading_content)
    if not headings:
        # Dangling '#': treat as a whole-file reference
        return FileReference(ReferenceType.FILE_ONLY, file_path, None, original)

    ref_type = (
        ReferenceType.NESTED_HEADING
        if len(headings) > 1
        else ReferenceType.SINGLE_HEADING
    )
    return FileReference(ref_type, file_path, headings, original)


def _split_headings(heading_content: str) -> tuple[str, ...]:
    """Split heading content into a cleaned heading path."""
    if "# " in heading_content:
        heading = heading_content.strip()
        return (heading,) if heading else ()

    return tuple(part.strip() for part in heading_content.split("#") if part.strip())


def find_references(text: str) -> Iterator[re.Match[str]]:
    """Iterate over reference tokens in document order.

    Args:
        text: Document text

    Returns:
        Iterator of regex matches; ``match.group(0)`` is the token text
    """
    return REFERENCE_PATTERN.finditer(text)
