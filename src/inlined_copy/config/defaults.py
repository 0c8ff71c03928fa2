"""Default configuration values for inlined-copy."""

MB_IN_BYTES = 1024 * 1024

DEFAULT_MAX_FILE_SIZE = 5 * MB_IN_BYTES
DEFAULT_MAX_RECURSION_DEPTH = 1

# Expansion configuration defaults
DEFAULT_EXPANSION_CONFIG: dict[str, int | bool] = {
    "max_file_size": DEFAULT_MAX_FILE_SIZE,
    "max_recursion_depth": DEFAULT_MAX_RECURSION_DEPTH,
    "process_parameters": False,
    "cache_enabled": True,
}

# Project-level configuration file names, in order of preference
PROJECT_CONFIG_FILENAMES: tuple[str, ...] = (".inlined-copy.yml", ".inlined-copy.yaml")

# User-level configuration directory (under the home directory)
USER_CONFIG_DIRNAME = ".inlined-copy"
USER_CONFIG_FILENAMES: tuple[str, ...] = ("config.yml", "config.yaml")
