"""Data models for inlined-copy."""

from inlined_copy.models.config import ExpansionConfig, ProjectConfig
from inlined_copy.models.result import ExpandResult, FileResult

__all__ = [
    "ExpandResult",
    "ExpansionConfig",
    "FileResult",
    "ProjectConfig",
]
