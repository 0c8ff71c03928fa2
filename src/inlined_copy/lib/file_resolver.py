"""File path resolution for references.

:class:`WorkspaceFileResolver` maps the path written inside ``![[...]]`` to a
file on disk. Strategies are tried in order until one finds an existing file:

1. Direct resolution (absolute, or relative to the referencing file's directory)
2. Extension-less lookup (``![[notes/todo]]`` finds ``notes/todo.md``)
3. Workspace-root resolution (``![[docs/guide.md]]`` from anywhere)
4. Proximity search up to three parent directories of the referencing file
5. Workspace-wide search by file name

Resolved files must lie inside the workspace root when one is configured.
"""

import asyncio
import glob
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Protocol

from inlined_copy.lib.logging_config import get_logger
from inlined_copy.models.result import FileResult

logger = get_logger(__name__)

DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = ("node_modules", ".git")


class FileResolver(Protocol):
    """Resolves referenced paths for the expander."""

    async def resolve_file_path(self, file_path: str, base_path: str) -> FileResult:
        """Resolve ``file_path`` relative to ``base_path``; never raises."""
        ...

    async def get_suggestions(self, file_path: str) -> list[str]:
        """Return candidate paths for an unresolved reference; never raises."""
        ...


class WorkspaceFileResolver:
    """Resolves references against the local filesystem.

    Attributes:
        workspace_root: Boundary for resolved files and root of workspace
            searches; None disables both
        exclude_dirs: Directory names skipped by workspace searches
        search_limit: Maximum candidates kept per workspace search
        suggestion_limit: Maximum suggestions returned
    """

    MAX_PROXIMITY_DEPTH = 3

    def __init__(
        self,
        workspace_root: str | Path | None = None,
        exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
        search_limit: int = 10,
        suggestion_limit: int = 5,
    ) -> None:
        self.workspace_root = Path(workspace_root).resolve() if workspace_root else None
        self.exclude_dirs = frozenset(exclude_dirs)
        self.search_limit = search_limit
        self.suggestion_limit = suggestion_limit
        self._search_cache: dict[str, list[Path]] = {}

    async def resolve_file_path(self, file_path: str, base_path: str) -> FileResult:
        """Resolve a referenced path to an absolute file path.

        Args:
            file_path: Path as written in the reference
            base_path: Directory of the referencing file

        Returns:
            FileResult with the resolved absolute path, or the failure reason
        """
        try:
            return await asyncio.to_thread(self._resolve, file_path, base_path)
        except OSError as e:
            logger.error(f"File resolution error for {file_path}: {e}")
            return FileResult.failed(f"Error resolving {file_path}: {e}")

    async def get_suggestions(self, file_path: str) -> list[str]:
        """Suggest workspace files similar to an unresolved reference.

        Files sharing the stem come first, then files sharing the extension.

        Args:
            file_path: Path as written in the reference

        Returns:
            Workspace-relative POSIX paths, possibly empty
        """
        try:
            return await asyncio.to_thread(self._suggest, file_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to collect suggestions for {file_path}: {e}")
            return []

    def clear_cache(self) -> None:
        """Forget cached workspace search results."""
        self._search_cache.clear()

    def _resolve(self, file_path: str, base_path: str) -> FileResult:
        reference = Path(file_path)
        base = Path(base_path)

        strategies: tuple[Callable[[Path, Path], Path | None], ...] = (
            self._resolve_direct,
            self._resolve_without_extension,
            self._resolve_from_root,
            self._resolve_by_proximity,
            self._resolve_by_search,
        )
        for strategy in strategies:
            candidate = strategy(reference, base)
            if candidate is None:
                continue

            resolved = candidate.resolve()
            if not self._in_workspace(resolved):
                logger.warning(f"Reference {file_path} resolves outside the workspace")
                return FileResult.failed(f"File is outside the workspace: {file_path}")

            logger.debug(f"Resolved {file_path} to {resolved} via {strategy.__name__}")
            return FileResult.succeeded(str(resolved))

        return FileResult.failed(f"File not found: {file_path}")

    def _resolve_direct(self, reference: Path, base: Path) -> Path | None:
        candidate = reference if reference.is_absolute() else base / reference
        return candidate if candidate.is_file() else None

    def _resolve_without_extension(self, reference: Path, base: Path) -> Path | None:
        if reference.suffix:
            return None

        directory = reference.parent if reference.is_absolute() else base / reference.parent
        if not directory.is_dir():
            return None

        matches = sorted(
            p for p in directory.iterdir() if p.is_file() and p.stem == reference.name
        )
        return matches[0] if matches else None

    def _resolve_from_root(self, reference: Path, base: Path) -> Path | None:
        if self.workspace_root is None:
            return None

        candidate = self.workspace_root / str(reference).lstrip("/")
        return candidate if candidate.is_file() else None

    def _resolve_by_proximity(self, reference: Path, base: Path) -> Path | None:
        current = base
        for _ in range(self.MAX_PROXIMITY_DEPTH + 1):
            candidate = current / reference.name
            if candidate.is_file():
                return candidate

            parent = current.parent
            if parent == current or not self._in_workspace(parent.resolve()):
                break
            current = parent

        return None

    def _resolve_by_search(self, reference: Path, base: Path) -> Path | None:
        candidates = self._search(reference)
        if not candidates:
            return None
        if len(candidates) > 1:
            logger.debug(
                f"Multiple candidates for {reference}: "
                f"{', '.join(str(c) for c in candidates)}; using {candidates[0]}"
            )
        return candidates[0]

    def _search(self, reference: Path) -> list[Path]:
        """Search the workspace for files matching a reference's name."""
        if self.workspace_root is None:
            return []

        key = str(reference)
        if key in self._search_cache:
            return self._search_cache[key]

        name = glob.escape(reference.name)
        pattern = name if reference.suffix else f"{name}.*"
        parent_parts = reference.parent.parts if str(reference.parent) != "." else ()
        parent_parts = tuple(p for p in parent_parts if p not in ("/", ""))

        results = sorted(
            p
            for p in self.workspace_root.rglob(pattern)
            if p.is_file()
            and not self._is_excluded(p)
            and (not parent_parts or p.parent.parts[-len(parent_parts) :] == parent_parts)
        )[: self.search_limit]

        self._search_cache[key] = results
        return results

    def _suggest(self, file_path: str) -> list[str]:
        if self.workspace_root is None:
            return []

        reference = Path(file_path)
        stem = glob.escape(reference.stem)
        found = [
            p for p in self.workspace_root.rglob(f"{stem}.*") if p.stem == reference.stem
        ]
        if not found and reference.suffix:
            found = list(self.workspace_root.rglob(f"*{glob.escape(reference.suffix)}"))

        suggestions = sorted(
            p.relative_to(self.workspace_root).as_posix()
            for p in found
            if p.is_file() and not self._is_excluded(p)
        )
        return suggestions[: self.suggestion_limit]

    def _is_excluded(self, path: Path) -> bool:
        if self.workspace_root is None:
            return False
        relative = path.relative_to(self.workspace_root)
        return any(part in self.exclude_dirs for part in relative.parts)

    def _in_workspace(self, path: Path) -> bool:
        if self.workspace_root is None:
            return True
        return path == self.workspace_root or path.is_relative_to(self.workspace_root)
