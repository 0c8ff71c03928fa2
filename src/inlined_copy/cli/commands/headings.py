"""CLI command listing the headings of a Markdown file."""

import sys
from pathlib import Path

import click

from inlined_copy.lib.heading_detector import detect_headings
from inlined_copy.lib.logging_config import get_logger

logger = get_logger(__name__)


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
def headings(source: str) -> None:
    """List the headings in SOURCE that references can point at.

    Headings are indented by level; custom ids ({#id}) are shown after the
    heading text.
    """
    try:
        content = Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {source}: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(3)

    found = detect_headings(content)
    if not found:
        click.echo("No headings found", err=True)
        return

    for heading in found:
        indent = "  " * (heading.level - 1)
        suffix = f" {{#{heading.id}}}" if heading.id else ""
        click.echo(f"{indent}{heading.text}{suffix}")
