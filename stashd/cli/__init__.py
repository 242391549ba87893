"""CLI entry point for stashd.

All arguments are handed to the command as positionals. Option scanning,
including "--" and the help flags, is done by parse_arguments so that
unknown options can be passed through to git.
"""

import sys

import typer

from stashd.cli.main import main_command, USAGE_EXIT_CODE
from stashd.cli.utils import Invocation, parse_arguments, usage_message


app = typer.Typer(
    name="stashd",
    help="stashd: filter git stash diffs by file",
    add_completion=False,
)

# Help flags are handled by parse_arguments, not by click
app.command(context_settings={"help_option_names": []})(main_command)


def run() -> None:
    """Console script entry point."""
    # A leading "--" stops click's own option parsing
    app(args=["--"] + sys.argv[1:])


__all__ = [
    "app",
    "main_command",
    "USAGE_EXIT_CODE",
    "Invocation",
    "parse_arguments",
    "usage_message",
]
