"""Configuration loading and validation for inlined-copy.

Main components:
- ConfigLoader: Resolve expansion settings from CLI, YAML files and env vars
- Default configuration values
- Validation utilities for configuration data
"""

from inlined_copy.config.loader import ConfigLoader

__all__ = [
    "ConfigLoader",
]
