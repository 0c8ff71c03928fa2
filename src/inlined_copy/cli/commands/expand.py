"""CLI command for expanding file references.

Implements the 'inlined-copy expand' command: reads a source file, inlines
every ![[...]] reference it contains and writes the combined text.
"""

import asyncio
import sys
from pathlib import Path

import click

from inlined_copy.config.loader import ConfigLoader
from inlined_copy.lib.errors import ConfigError
from inlined_copy.lib.expander import FileExpander
from inlined_copy.lib.file_reader import ContentCache, LocalFileReader
from inlined_copy.lib.file_resolver import WorkspaceFileResolver
from inlined_copy.lib.logging_config import get_logger, setup_logging
from inlined_copy.lib.parameter_processor import ParameterProcessor
from inlined_copy.lib.ui.colors import ANSIColors, colorize
from inlined_copy.models.config import ExpansionConfig

logger = get_logger(__name__)


def _default_workspace(source_path: Path) -> Path:
    """Pick the workspace root when --workspace is not given.

    The current directory is used when it contains the source; otherwise
    the source's own directory, so references next to it still resolve.
    """
    cwd = Path.cwd().resolve()
    if source_path.is_relative_to(cwd):
        return cwd
    logger.debug(f"{source_path} is outside {cwd}; using its directory as workspace")
    return source_path.parent


def _prompt_parameter(name: str, default: str) -> str:
    """Ask for a placeholder value on the terminal."""
    return click.prompt(
        f"Value for {name}",
        default=default,
        show_default=bool(default),
        err=True,
    )


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the expanded text to this file instead of stdout",
)
@click.option(
    "--workspace",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Workspace root used for searches (defaults to the current directory, "
    "or the source directory when SOURCE lies outside it)",
)
@click.option(
    "--max-depth",
    type=int,
    default=None,
    help="Number of nested reference levels to expand",
)
@click.option(
    "--max-file-size",
    type=int,
    default=None,
    help="Largest file in bytes that may be inlined",
)
@click.option(
    "--params/--no-params",
    default=None,
    help="Prompt for {{name}} placeholders after expansion",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with debug information",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only report errors",
)
def expand(
    source: str,
    output: str | None,
    workspace: str | None,
    max_depth: int | None,
    max_file_size: int | None,
    params: bool | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Expand file references in SOURCE.

    Every ![[path]], ![[path#heading]] and ![[path#parent#child]] reference
    is replaced with the referenced file or section. References that cannot
    be expanded are replaced with an HTML comment describing the problem.

    SOURCE is the path to the file to expand.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    source_path = Path(source).resolve()
    base_path = str(source_path.parent)
    logger.info(f"Expand command invoked: source={source_path}, output={output}")

    try:
        cli_config = None
        if max_depth is not None or max_file_size is not None or params is not None:
            cli_config = ExpansionConfig(
                max_file_size=max_file_size,
                max_recursion_depth=max_depth,
                process_parameters=params,
                cache_enabled=None,
            )

        config = ConfigLoader().load_expansion_config(base_path, cli_config)

        expander = FileExpander(
            resolver=WorkspaceFileResolver(workspace or _default_workspace(source_path)),
            reader=LocalFileReader(ContentCache() if config.cache_enabled else None),
            max_file_size=config.max_file_size,
            max_recursion_depth=config.max_recursion_depth,
        )

        text = source_path.read_text(encoding="utf-8")
        result = asyncio.run(
            expander.expand_files(text, base_path, source_path=str(source_path))
        )
        if not result.success:
            click.echo(
                colorize(f"Expansion Error: {result.error}", ANSIColors.RED), err=True
            )
            sys.exit(3)

        content = result.content or ""
        if config.process_parameters:
            processor = ParameterProcessor(
                prompt=_prompt_parameter,
                max_recursion_depth=config.max_recursion_depth,
            )
            content = processor.process(content)

        _write_output(content, output, quiet)
        sys.exit(0)

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        click.echo(f"Configuration Error: {e}", err=True)
        sys.exit(2)
    except ValueError as e:
        # Pydantic rejects out-of-range CLI values before the loader runs
        logger.error(f"Invalid option: {e}")
        click.echo(f"Configuration Error: {e}", err=True)
        sys.exit(2)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {source}: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(3)


def _write_output(content: str, output: str | None, quiet: bool) -> None:
    """Write expanded text to a file or stdout.

    Args:
        content: Expanded text
        output: Destination file path, or None for stdout
        quiet: Suppress the confirmation message
    """
    if output is None:
        click.echo(content, nl=False)
        return

    Path(output).write_text(content, encoding="utf-8")
    logger.debug(f"Wrote {len(content)} characters to {output}")
    if not quiet:
        click.echo(colorize(f"Expanded text saved to {output}", ANSIColors.GREEN), err=True)
