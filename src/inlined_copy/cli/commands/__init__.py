"""Click commands registered on the inlined-copy group."""

from inlined_copy.cli.commands.expand import expand
from inlined_copy.cli.commands.headings import headings

__all__ = ["expand", "headings"]
