"""End-to-end expansion over real files.

These tests wire FileExpander to WorkspaceFileResolver and LocalFileReader
and check the complete output for realistic document trees.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from inlined_copy.lib.expander import FileExpander
from inlined_copy.lib.file_reader import ContentCache, LocalFileReader
from inlined_copy.lib.file_resolver import WorkspaceFileResolver


def build_expander(workspace: Path, **kwargs: int) -> FileExpander:
    return FileExpander(
        WorkspaceFileResolver(workspace),
        LocalFileReader(ContentCache()),
        **kwargs,
    )


@pytest.mark.integration
class TestExpansionEndToEnd:
    """Scenarios combining resolution, extraction and recursion."""

    @pytest.mark.asyncio
    async def test_prompt_assembled_from_sections(
        self, temp_dir: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Test a prompt built from a whole file, a section and a nested section."""
        write_file("context/project.md", "Project: inlined-copy")
        write_file(
            "docs/api.md",
            "# API\n## Client {#client}\nclient docs\n## Server\n### Auth\ntokens\n",
        )
        source = write_file(
            "prompt.md",
            "![[context/project.md]]\n\n![[docs/api.md#client]]\n\n![[api.md#Server#Auth]]\n",
        )

        expander = build_expander(temp_dir)
        result = await expander.expand_files(
            source.read_text(encoding="utf-8"), str(temp_dir), source_path=str(source)
        )

        assert result.success
        assert result.content == (
            "Project: inlined-copy\n\n"
            "## Client {#client}\nclient docs\n\n"
            "### Auth\ntokens\n"
        )

    @pytest.mark.asyncio
    async def test_cycle_between_files(
        self, temp_dir: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Test that a cycle through real files is cut with a marker."""
        write_file("a.md", "A ![[b.md]]")
        write_file("b.md", "B ![[a.md]]")
        source = write_file("main.md", "![[a.md]]")

        expander = build_expander(temp_dir, max_recursion_depth=3)
        content = await expander.expand(
            source.read_text(encoding="utf-8"), str(temp_dir), source_path=str(source)
        )

        assert content == "A B <!-- Circular reference detected: main.md → a.md → b.md → a.md -->"

    @pytest.mark.asyncio
    async def test_not_found_with_suggestions(
        self, temp_dir: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Test that a typo yields a marker listing similar files."""
        write_file("notes/setup.txt", "setup")
        content = await build_expander(temp_dir).expand("![[setup.md]]", str(temp_dir))
        assert content == "<!-- File not found: setup.md (did you mean: notes/setup.txt?) -->"

    @pytest.mark.asyncio
    async def test_oversized_real_file(
        self, temp_dir: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        """Test that a real file above the limit is replaced with a marker."""
        write_file("big.md", "x" * 2048)
        content = await build_expander(temp_dir, max_file_size=1024).expand(
            "before ![[big.md]] after", str(temp_dir)
        )
        assert content.startswith("before <!-- File too large: big.md (")
        assert content.endswith("limit) --> after")
