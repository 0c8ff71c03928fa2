"""Tests for heading-based section extraction."""

from inlined_copy.lib.section_extractor import (
    SectionExtractor,
    extract_nested_section,
    extract_section,
    normalize_heading,
)

GUIDE = """# Guide
Intro text.

## Install
Run pip.

### Linux
apt stuff.

## Usage
Use it.

### Advanced
Flags here.

## Reference {#ref}
API.
"""

SERVICES = """# Frontend
## Setup
frontend setup
# Backend
## Setup
backend setup
"""


class TestNormalizeHeading:
    """Tests for query normalization."""

    def test_strips_leading_hashes_and_whitespace(self) -> None:
        """Test that markdown markers before the heading text are removed."""
        assert normalize_heading("##  Install  ") == "Install"

    def test_keeps_inner_hashes(self) -> None:
        """Test that '#' characters inside the text are preserved."""
        assert normalize_heading("Section # 1") == "Section # 1"


class TestExtractSection:
    """Tests for single heading extraction."""

    def test_section_stops_at_same_level(self) -> None:
        """Test that a section ends before the next sibling heading."""
        assert extract_section(GUIDE, "Install") == (
            "## Install\nRun pip.\n\n### Linux\napt stuff."
        )

    def test_top_heading_runs_to_end(self) -> None:
        """Test that a section without a following peer runs to the end."""
        assert extract_section(GUIDE, "Guide") == GUIDE.strip()

    def test_subsection(self) -> None:
        """Test that a deeper heading stops at the next shallower heading."""
        assert extract_section(GUIDE, "Linux") == "### Linux\napt stuff."

    def test_lookup_by_custom_id(self) -> None:
        """Test that a custom id selects its heading."""
        assert extract_section(GUIDE, "ref") == "## Reference {#ref}\nAPI."

    def test_case_insensitive_text(self) -> None:
        """Test that heading text matching ignores case."""
        assert extract_section(GUIDE, "usage") == (
            "## Usage\nUse it.\n\n### Advanced\nFlags here."
        )

    def test_query_with_markdown_markers(self) -> None:
        """Test that a query written as '## Install' still matches."""
        assert extract_section(GUIDE, "## Install") == extract_section(GUIDE, "Install")

    def test_empty_query_returns_content(self) -> None:
        """Test that an empty query returns the whole content unchanged."""
        assert extract_section(GUIDE, "") == GUIDE

    def test_missing_heading(self) -> None:
        """Test that an unknown heading yields None."""
        assert extract_section(GUIDE, "Missing") is None

    def test_first_duplicate_wins(self) -> None:
        """Test that the first of duplicate headings is extracted."""
        assert extract_section(SERVICES, "Setup") == "## Setup\nfrontend setup"

    def test_id_beats_earlier_text_match(self) -> None:
        """Test that an id match wins over an earlier heading with that text."""
        content = "## ref\nby text\n## Reference {#ref}\nby id\n"
        assert extract_section(content, "ref") == "## Reference {#ref}\nby id"


class TestExtractNestedSection:
    """Tests for heading path extraction."""

    def test_child_within_parent(self) -> None:
        """Test that the child is looked up inside the parent's section."""
        assert extract_nested_section(SERVICES, ["Backend", "Setup"]) == (
            "## Setup\nbackend setup"
        )

    def test_child_of_first_parent(self) -> None:
        """Test that the child section ends at the parent's end."""
        assert extract_nested_section(SERVICES, ["Frontend", "Setup"]) == (
            "## Setup\nfrontend setup"
        )

    def test_three_levels(self) -> None:
        """Test a path through three heading levels."""
        assert extract_nested_section(GUIDE, ["Guide", "Usage", "Advanced"]) == (
            "### Advanced\nFlags here."
        )

    def test_child_outside_parent_not_found(self) -> None:
        """Test that a child under another parent does not match."""
        content = "# A\n## X\nax\n# B\n## Y\nby\n"
        assert extract_nested_section(content, ["A", "Y"]) is None

    def test_parent_does_not_match_itself(self) -> None:
        """Test that the parent heading is not a candidate for its child."""
        assert extract_nested_section(SERVICES, ["Frontend", "Frontend"]) is None

    def test_missing_parent(self) -> None:
        """Test that an unknown first segment yields None."""
        assert extract_nested_section(SERVICES, ["Database", "Setup"]) is None

    def test_empty_path(self) -> None:
        """Test that an empty heading path yields None."""
        assert extract_nested_section(SERVICES, []) is None


class TestSectionExtractor:
    """Tests for the reusable extractor object."""

    def test_headings_are_parsed_once(self) -> None:
        """Test that the extractor exposes the detected headings."""
        extractor = SectionExtractor(GUIDE)
        assert [h.text for h in extractor.headings] == [
            "Guide",
            "Install",
            "Linux",
            "Usage",
            "Advanced",
            "Reference",
        ]

    def test_repeated_lookups(self) -> None:
        """Test that several lookups on one extractor are independent."""
        extractor = SectionExtractor(SERVICES)
        assert extractor.extract("Backend") == "# Backend\n## Setup\nbackend setup"
        assert extractor.extract_nested(["Backend", "Setup"]) == "## Setup\nbackend setup"
        assert extractor.extract("Frontend") == "# Frontend\n## Setup\nfrontend setup"
