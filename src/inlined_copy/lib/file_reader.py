"""File reading collaborator for the expander.

The expander only needs two operations, a size probe and a UTF-8 read. Both
are async so blocking filesystem calls can be moved off the event loop.
Failures surface as :class:`ExpansionError` so the expander can render them
next to the reference that caused them.
"""

import asyncio
from pathlib import Path
from typing import Protocol

from inlined_copy.lib.errors import ErrorKind, ExpansionError
from inlined_copy.lib.logging_config import get_logger

logger = get_logger(__name__)


class FileReader(Protocol):
    """Reads referenced files for the expander."""

    async def stat_size(self, path: str) -> int:
        """Return the size of ``path`` in bytes."""
        ...

    async def read_text(self, path: str) -> str:
        """Return the UTF-8 decoded content of ``path``."""
        ...


class ContentCache:
    """File contents keyed by absolute path and modification time.

    A file whose mtime changes no longer matches its cached entry, so stale
    content is never returned.
    """

    def __init__(self) -> None:
        """Create an empty cache."""
        self._entries: dict[str, tuple[int, str]] = {}

    def get(self, path: str, mtime_ns: int) -> str | None:
        """Return cached content if it was stored for the same mtime."""
        entry = self._entries.get(path)
        if entry is None or entry[0] != mtime_ns:
            return None
        return entry[1]

    def set(self, path: str, mtime_ns: int, content: str) -> None:
        """Store content read at the given mtime."""
        self._entries[path] = (mtime_ns, content)

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        logger.debug("File content cache cleared")

    def __len__(self) -> int:
        return len(self._entries)


class LocalFileReader:
    """Reads files from the local filesystem, optionally through a cache."""

    def __init__(self, cache: ContentCache | None = None) -> None:
        """Initialize the reader.

        Args:
            cache: Content cache to consult; None disables caching
        """
        self.cache = cache

    async def stat_size(self, path: str) -> int:
        """Return the size of ``path`` in bytes.

        Raises:
            ExpansionError: NOT_FOUND if the file is missing, READ_FAILED on
                other OS errors
        """
        try:
            stat = await asyncio.to_thread(Path(path).stat)
        except OSError as e:
            raise to_expansion_error(path, e) from e
        return stat.st_size

    async def read_text(self, path: str) -> str:
        """Return the UTF-8 content of ``path``.

        Raises:
            ExpansionError: NOT_FOUND if the file is missing, READ_FAILED on
                other OS or decoding errors
        """
        try:
            return await asyncio.to_thread(self._read_text, path)
        except (OSError, UnicodeDecodeError) as e:
            raise to_expansion_error(path, e) from e

    def _read_text(self, path: str) -> str:
        """Blocking read with cache lookup."""
        file_path = Path(path)
        if self.cache is None:
            return file_path.read_text(encoding="utf-8")

        key = str(file_path.absolute())
        mtime_ns = file_path.stat().st_mtime_ns
        cached = self.cache.get(key, mtime_ns)
        if cached is not None:
            logger.debug(f"Using cached content for {key}")
            return cached

        content = file_path.read_text(encoding="utf-8")
        self.cache.set(key, mtime_ns, content)
        return content


def to_expansion_error(path: str, error: Exception) -> ExpansionError:
    """Convert a filesystem exception into an ExpansionError."""
    if isinstance(error, FileNotFoundError):
        return ExpansionError(ErrorKind.NOT_FOUND, f"File not found: {path}")
    return ExpansionError(ErrorKind.READ_FAILED, f"Failed to read file: {path} ({error})")
