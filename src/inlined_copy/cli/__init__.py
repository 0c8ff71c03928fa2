"""Command-line interface for inlined-copy."""
