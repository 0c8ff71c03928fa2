"""Recursive expansion of ``![[...]]`` file references.

The expander walks a text left to right, replaces each reference with the
content it points to and expands references inside that content in turn.
A failure affecting one reference is rendered in place of that reference
and never stops its siblings:

- unresolvable file: ``<!-- File not found: path -->`` (with suggestions), or the
  resolver's own reason such as ``File is outside the workspace: path``
- read failure reported by the reader: ``<!-- Failed to read file: ... -->``
- file above the size limit: ``<!-- File too large: ... -->``, not read
- file already on the inclusion chain: ``<!-- Circular reference detected: ... -->``
- missing heading or malformed reference: the reference is left as written
- depth limit reached: the file is included without expanding its references

Anything else is a programming or environment fault and fails the whole call.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from inlined_copy.config.defaults import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_RECURSION_DEPTH,
    MB_IN_BYTES,
)
from inlined_copy.lib.errors import ErrorKind, ExpansionError, InlinedCopyError
from inlined_copy.lib.file_reader import FileReader, to_expansion_error
from inlined_copy.lib.file_resolver import FileResolver
from inlined_copy.lib.logging_config import get_logger
from inlined_copy.lib.reference_parser import FileReference, find_references, parse_reference
from inlined_copy.lib.section_extractor import SectionExtractor
from inlined_copy.models.result import ExpandResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExpansionState:
    """Inclusion chain of the branch currently being expanded.

    Each descent creates a new state, so sibling references never see each
    other's files as ancestors.

    Attributes:
        chain: Resolved paths from the outermost included file inwards
        current_depth: Number of file inclusions above the current text
    """

    chain: tuple[str, ...] = ()
    current_depth: int = 0

    @property
    def visited_paths(self) -> frozenset[str]:
        """Paths that may not be included again on this branch."""
        return frozenset(self.chain)

    @classmethod
    def initial(cls, source_path: str | None = None) -> "ExpansionState":
        """Create the state for a top-level call."""
        if source_path is None:
            return cls()
        return cls(chain=(str(Path(source_path).resolve()),))

    def descend(self, path: str) -> "ExpansionState":
        """Return the state for expanding the content of ``path``."""
        return ExpansionState(
            chain=(*self.chain, path), current_depth=self.current_depth + 1
        )


class FileExpander:
    """Expands file references using injected resolver and reader.

    Attributes:
        resolver: Maps referenced paths to files
        reader: Reads file sizes and contents
        max_file_size: Largest file in bytes that may be included
        max_recursion_depth: Number of inclusion levels whose references
            are expanded
    """

    def __init__(
        self,
        resolver: FileResolver,
        reader: FileReader,
        logger: logging.Logger | None = None,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        max_recursion_depth: int = DEFAULT_MAX_RECURSION_DEPTH,
    ) -> None:
        """Initialize the expander.

        Args:
            resolver: File resolver collaborator
            reader: File reader collaborator
            logger: Sink for warnings and errors; defaults to the module logger
            max_file_size: Maximum file size in bytes
            max_recursion_depth: Maximum nesting depth of expanded references

        Raises:
            ValueError: If a limit is out of range
        """
        if max_file_size <= 0:
            raise ValueError("max_file_size must be positive")
        if max_recursion_depth < 0:
            raise ValueError("max_recursion_depth must not be negative")

        self.resolver = resolver
        self.reader = reader
        self.logger = logger if logger is not None else get_logger(__name__)
        self.max_file_size = max_file_size
        self.max_recursion_depth = max_recursion_depth

    async def expand(
        self, text: str, base_path: str, source_path: str | None = None
    ) -> str:
        """Expand every reference in ``text``.

        Args:
            text: Text containing ``![[...]]`` references
            base_path: Directory relative references are resolved against
            source_path: File ``text`` was read from; a reference back to it
                is reported as circular

        Returns:
            The expanded text

        Raises:
            ExpansionError: With kind UNEXPECTED for faults that are not
                tied to a single reference
        """
        try:
            return await self._expand(text, base_path, ExpansionState.initial(source_path))
        except InlinedCopyError:
            raise
        except Exception as e:
            self.logger.error(f"Unexpected error while expanding references: {e}", exc_info=True)
            raise ExpansionError(
                ErrorKind.UNEXPECTED, f"Unexpected error while expanding references: {e}"
            ) from e

    async def expand_files(
        self, text: str, base_path: str, source_path: str | None = None
    ) -> ExpandResult:
        """Expand references and report the outcome as a result value.

        Never raises; see :meth:`expand` for the arguments.

        Returns:
            ExpandResult with the expanded content or the error message
        """
        try:
            return ExpandResult.succeeded(await self.expand(text, base_path, source_path))
        except InlinedCopyError as e:
            return ExpandResult.failed(str(e))

    async def _expand(self, text: str, base_path: str, state: ExpansionState) -> str:
        self.logger.debug(f"Expanding file references at depth {state.current_depth}")

        parts: list[str] = []
        position = 0

        for match in find_references(text):
            reference = parse_reference(match.group(0))
            parts.append(text[position : match.start()])
            try:
                parts.append(await self._expand_reference(reference, base_path, state))
            except ExpansionError as e:
                if not e.is_recoverable:
                    raise
                parts.append(self._render_failure(e, reference))
            position = match.end()

        parts.append(text[position:])
        return "".join(parts)

    async def _expand_reference(
        self, reference: FileReference, base_path: str, state: ExpansionState
    ) -> str:
        """Produce the replacement text for one reference.

        Raises:
            ExpansionError: For any failure local to this reference
        """
        original = reference.original_text
        if reference.is_malformed:
            raise ExpansionError(
                ErrorKind.MALFORMED_REFERENCE, f"Malformed reference: {original}", original
            )

        resolved = await self._resolve(reference, base_path)

        if resolved in state.visited_paths:
            chain = " → ".join(Path(p).name for p in (*state.chain, resolved))
            raise ExpansionError(
                ErrorKind.CIRCULAR_REFERENCE,
                f"Circular reference detected: {chain}",
                original,
            )

        try:
            size = await self.reader.stat_size(resolved)
        except (OSError, UnicodeDecodeError) as e:
            raise _local_failure(reference, e) from e

        if size > self.max_file_size:
            raise ExpansionError(
                ErrorKind.OVERSIZED_FILE,
                f"File too large: {reference.file_path} "
                f"({size / MB_IN_BYTES:.2f}MB exceeds "
                f"{self.max_file_size / MB_IN_BYTES:.2f}MB limit)",
                original,
            )

        try:
            content = await self.reader.read_text(resolved)
        except (OSError, UnicodeDecodeError) as e:
            raise _local_failure(reference, e) from e
        content = self._select_section(content, reference)

        if state.current_depth + 1 > self.max_recursion_depth:
            self.logger.info(
                f"Maximum recursion depth ({self.max_recursion_depth}) reached; "
                f"including {reference.file_path} without expanding its references"
            )
            return content

        return await self._expand(content, str(Path(resolved).parent), state.descend(resolved))

    async def _resolve(self, reference: FileReference, base_path: str) -> str:
        """Resolve a reference to an absolute path or raise NOT_FOUND."""
        result = await self.resolver.resolve_file_path(reference.file_path, base_path)
        if result.success and result.path:
            return result.path

        suggestions = await self.resolver.get_suggestions(reference.file_path)
        message = result.error or f"File not found: {reference.file_path}"
        if suggestions:
            message += f" (did you mean: {', '.join(suggestions)}?)"
        raise ExpansionError(ErrorKind.NOT_FOUND, message, reference.original_text)

    def _select_section(self, content: str, reference: FileReference) -> str:
        """Narrow file content to the referenced section, if any."""
        if not reference.heading_path:
            return content

        extractor = SectionExtractor(content)
        if len(reference.heading_path) == 1:
            section = extractor.extract(reference.heading_path[0])
        else:
            section = extractor.extract_nested(reference.heading_path)

        if section is None:
            raise ExpansionError(
                ErrorKind.HEADING_NOT_FOUND,
                f"Heading not found: {' > '.join(reference.heading_path)} "
                f"in {reference.file_path}",
                reference.original_text,
            )
        return section

    def _render_failure(self, error: ExpansionError, reference: FileReference) -> str:
        """Log a reference-local failure and return its replacement text."""
        if error.kind is ErrorKind.CIRCULAR_REFERENCE:
            self.logger.error(error.message)
        elif error.kind is ErrorKind.MALFORMED_REFERENCE:
            self.logger.debug(error.message)
        else:
            self.logger.warning(error.message)

        if error.kind in (ErrorKind.MALFORMED_REFERENCE, ErrorKind.HEADING_NOT_FOUND):
            return reference.original_text
        return f"<!-- {error.message} -->"


def _local_failure(reference: FileReference, error: Exception) -> ExpansionError:
    """Tag a reader exception with the reference that triggered it."""
    converted = to_expansion_error(reference.file_path, error)
    converted.reference = reference.original_text
    return converted
