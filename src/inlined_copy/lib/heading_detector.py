"""ATX heading detection for Markdown documents.

Recognizes ``#`` through ``#######`` headings with an optional trailing custom
id (``## Setup {#setup}``). Fenced code blocks are not tracked, so a line
inside a fence that looks like a heading is reported as one.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

HEADING_PATTERN = re.compile(r"^(#{1,7})\s+([^{]+)(?:\s+\{#([a-zA-Z0-9_-]+)\})?$")


@dataclass(frozen=True)
class HeadingInfo:
    """A heading line found in a document.

    Attributes:
        level: Number of leading ``#`` characters (1-7)
        text: Heading text without the custom id suffix, trimmed
        raw_line: The heading line as it appears in the document
        line_index: Zero-based line number
        id: Custom id from a trailing ``{#id}``, if present
    """

    level: int
    text: str
    raw_line: str
    line_index: int
    id: str | None = None


def detect_headings(content: str) -> list[HeadingInfo]:
    """Detect all headings in document order.

    Args:
        content: Markdown text

    Returns:
        List of HeadingInfo, ``line_index`` strictly increasing
    """
    headings: list[HeadingInfo] = []

    for index, line in enumerate(content.split("\n")):
        match = HEADING_PATTERN.match(line.rstrip("\r"))
        if not match:
            continue
        headings.append(
            HeadingInfo(
                level=len(match.group(1)),
                text=match.group(2).strip(),
                raw_line=line,
                line_index=index,
                id=match.group(3),
            )
        )

    return headings


def find_heading_by_id(
    headings: Sequence[HeadingInfo], heading_id: str
) -> HeadingInfo | None:
    """Return the first heading whose custom id equals ``heading_id`` exactly."""
    return next((h for h in headings if h.id == heading_id), None)


def find_heading_by_text(
    headings: Sequence[HeadingInfo], text: str
) -> HeadingInfo | None:
    """Return the first heading whose text matches ``text`` ignoring case."""
    wanted = text.lower()
    return next((h for h in headings if h.text.lower() == wanted), None)


def find_heading(
    headings: Sequence[HeadingInfo], text_or_id: str
) -> HeadingInfo | None:
    """Find a heading by custom id, falling back to its text.

    An id match wins over a text match anywhere in the document.
    """
    return find_heading_by_id(headings, text_or_id) or find_heading_by_text(
        headings, text_or_id
    )
