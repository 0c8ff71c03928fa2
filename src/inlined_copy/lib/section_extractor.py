"""Section extraction from Markdown documents based on heading structure.

A section runs from its heading line up to, but not including, the next
heading of the same or a higher level (a smaller or equal number of ``#``).
Deeper headings stay inside the section as sub-sections.

Nested lookups narrow the search step by step: each heading in the path is
looked up only among the headings of the section found for the previous
step, so identically named children of other parents never match.
"""

import re
from collections.abc import Sequence

from inlined_copy.lib.heading_detector import HeadingInfo, detect_headings, find_heading

_LEADING_MARKUP = re.compile(r"^[#\s]+")


def normalize_heading(text_or_id: str) -> str:
    """Strip leading ``#`` markers and surrounding whitespace from a query."""
    return _LEADING_MARKUP.sub("", text_or_id).strip()


class SectionExtractor:
    """Locates heading sections within one document.

    Headings and line offsets are computed once on construction, so several
    lookups against the same content share the parsing work.

    Attributes:
        content: The document text
        headings: Detected headings in document order
    """

    def __init__(self, content: str) -> None:
        """Parse headings and line offsets of ``content``.

        Args:
            content: Markdown text
        """
        self.content = content
        self.headings = detect_headings(content)
        self._line_offsets = _line_offsets(content)

    def extract(self, text_or_id: str) -> str | None:
        """Extract the section for a heading text or custom id.

        Args:
            text_or_id: Heading text (case-insensitive) or custom id

        Returns:
            Section text including its heading line, trimmed; the whole
            content when the query is empty; None when no heading matches
        """
        query = normalize_heading(text_or_id) if text_or_id else ""
        if not query:
            return self.content

        span = self._locate(query, self.headings, len(self.content))
        if span is None:
            return None
        return self.content[span[0] : span[1]].strip()

    def extract_nested(self, heading_path: Sequence[str]) -> str | None:
        """Extract the innermost section addressed by a heading path.

        Args:
            heading_path: Heading texts or ids, outermost first

        Returns:
            Innermost section text, trimmed, or None when any step of the
            path is not found within its parent
        """
        if not heading_path:
            return None

        candidates: Sequence[HeadingInfo] = self.headings
        start, end = 0, len(self.content)

        for segment in heading_path:
            query = normalize_heading(segment)
            if not query:
                return None

            span = self._locate(query, candidates, end)
            if span is None:
                return None

            start, end = span
            # Only headings strictly below the parent heading line
            candidates = [
                h
                for h in self.headings
                if start < self._line_offsets[h.line_index] < end
            ]

        return self.content[start:end].strip()

    def _locate(
        self, query: str, candidates: Sequence[HeadingInfo], limit: int
    ) -> tuple[int, int] | None:
        """Find the character span of the section for ``query``.

        Args:
            query: Normalized heading text or id
            candidates: Headings eligible for matching
            limit: Offset the section may not extend past

        Returns:
            ``(start, end)`` offsets into the content, or None
        """
        target = find_heading(candidates, query)
        if target is None:
            return None

        start = self._line_offsets[target.line_index]
        end = limit
        for heading in self.headings:
            if heading.line_index > target.line_index and heading.level <= target.level:
                end = min(end, self._line_offsets[heading.line_index])
                break

        return start, end


def _line_offsets(content: str) -> list[int]:
    """Character offset of the first character of every line."""
    offsets = [0]
    for line in content.split("\n")[:-1]:
        offsets.append(offsets[-1] + len(line) + 1)
    return offsets


def extract_section(content: str, text_or_id: str) -> str | None:
    """Extract a single heading section from ``content``.

    See :meth:`SectionExtractor.extract`.
    """
    return SectionExtractor(content).extract(text_or_id)


def extract_nested_section(content: str, heading_path: Sequence[str]) -> str | None:
    """Extract a nested heading section from ``content``.

    See :meth:`SectionExtractor.extract_nested`.
    """
    return SectionExtractor(content).extract_nested(heading_path)
