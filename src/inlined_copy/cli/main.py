"""Entry point for the inlined-copy command-line tool."""

import click

from inlined_copy import __version__
from inlined_copy.cli.commands import expand, headings


@click.group(name="inlined-copy")
@click.version_option(version=__version__, prog_name="inlined-copy")
def main() -> None:
    """Expand ![[file]] references into a single self-contained text.

    \b
    EXAMPLES:

        Expand a prompt and print the result:
            inlined-copy expand prompt.md

        Include at most two levels of nested references:
            inlined-copy expand prompt.md --max-depth 2 --output full.md

        List the headings a reference can point at:
            inlined-copy headings notes/design.md
    """
    pass


main.add_command(expand)
main.add_command(headings)


if __name__ == "__main__":
    main()
