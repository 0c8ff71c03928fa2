"""Terminal helpers for command-line status output."""

from inlined_copy.lib.ui.colors import ANSIColors, colorize
from inlined_copy.lib.ui.terminal import is_tty

__all__ = [
    "ANSIColors",
    "colorize",
    "is_tty",
]
