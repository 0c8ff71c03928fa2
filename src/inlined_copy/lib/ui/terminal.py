"""Terminal detection utilities."""

import sys
from typing import TextIO


def is_tty(stream: TextIO | None = None) -> bool:
    """Check if a stream is connected to a terminal.

    Status messages go to stderr while expanded text goes to stdout, so the
    stream to test is selectable.

    Args:
        stream: Stream to check; defaults to stderr

    Returns:
        True if the stream is an interactive terminal, False otherwise.
    """
    target = stream if stream is not None else sys.stderr
    return target.isatty()
