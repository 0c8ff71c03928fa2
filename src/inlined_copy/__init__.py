"""inlined-copy - Expand ![[file]] references into self-contained text.

inlined-copy replaces inline file references in Markdown and prompt files
with the content they point to, so a document that is split across several
files can be copied or shared as a single text.

Main features:
- Whole-file references: ![[path/to/file.md]]
- Section references by heading text or custom id: ![[file.md#Setup]]
- Nested section paths: ![[file.md#Guide#Install]]
- Recursive expansion with cycle detection and size and depth limits
- Optional {{name=default}} parameter substitution
"""

from inlined_copy.config.loader import ConfigLoader
from inlined_copy.lib.errors import (
    ConfigError,
    ErrorKind,
    ExpansionError,
    InlinedCopyError,
)
from inlined_copy.lib.expander import FileExpander
from inlined_copy.lib.reference_parser import parse_reference
from inlined_copy.lib.section_extractor import extract_nested_section, extract_section

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "ConfigLoader",
    "ErrorKind",
    "ExpansionError",
    "FileExpander",
    "InlinedCopyError",
    "extract_nested_section",
    "extract_section",
    "parse_reference",
]
