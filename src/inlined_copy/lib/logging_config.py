"""Logging configuration for inlined-copy.

All modules obtain their logger through :func:`get_logger` so that every
record lives under the ``inlined_copy`` namespace and can be tuned from the
command line with :func:`setup_logging`.
"""

import logging
import sys

ROOT_LOGGER_NAME = "inlined_copy"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger scoped under the package namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the package logger for command-line use.

    Safe to call more than once; the previously installed handler is
    replaced rather than stacked.

    Args:
        verbose: Emit DEBUG records
        quiet: Only emit ERROR records (ignored when verbose is set)
    """
    global _handler

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
    root.setLevel(level)
    root.propagate = False
