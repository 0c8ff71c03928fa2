"""Core library: reference parsing, section extraction and expansion."""
