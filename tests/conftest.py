"""Pytest configuration and shared fixtures for inlined-copy tests."""

import logging
import os
import shutil
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from inlined_copy.config.loader import ENV_VAR_MAP
from inlined_copy.lib.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test file operations.

    The path is resolved so comparisons with resolved file paths hold on
    platforms where the temp directory is a symlink.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp()).resolve()
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def isolated_env() -> Generator[dict[str, str]]:
    """Provide isolated environment variables for testing.

    Saves current environment, removes every INLINED_COPY_* variable and
    restores the original environment after the test.

    Yields:
        Dictionary of original environment variables

    Cleanup:
        Restores original environment after test
    """
    original_env = os.environ.copy()
    for env_var in ENV_VAR_MAP.values():
        os.environ.pop(env_var, None)
    yield original_env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def write_file(temp_dir: Path) -> Callable[[str, str], Path]:
    """Return a helper writing UTF-8 files below ``temp_dir``.

    Returns:
        Callable taking a relative path and content, returning the file path
    """

    def _write(relative: str, content: str) -> Path:
        path = temp_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[logging.Logger]:
    """Restore the package logger after each test.

    CLI commands call ``setup_logging``, which attaches a handler to the
    stream that is current at the time; under CliRunner that stream is
    closed once the invocation ends.

    Yields:
        The ``inlined_copy`` logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield root
    root.handlers = handlers
    root.setLevel(level)
    root.propagate = propagate
