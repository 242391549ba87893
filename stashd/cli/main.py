"""Main CLI command for filtering stash diffs."""

import logging
import os
from typing import List, Optional

import typer

from stashd.config import load_config, should_use_color
from stashd.filter import filter_stash_diff, write_lines
from stashd.git import GitError, stash_diff_lines
from stashd.global_config import GlobalConfigError
from stashd.pager import PagerError, discard_stdout, open_output
from stashd.cli.utils import (
    COLOR_OPTION,
    configure_logging,
    parse_arguments,
    stdout_is_terminal,
    usage_message,
)

logger = logging.getLogger(__name__)

USAGE_EXIT_CODE = 129


def main_command(
    ctx: typer.Context,
    args: Optional[List[str]] = typer.Argument(
        None,
        help="Diff options for git, an optional --, then filename substrings",
    ),
) -> None:
    """Show only the parts of `git stash list -p` that touch the given files."""
    args = args or []
    invocation = parse_arguments(args)

    if invocation.show_help or not args:
        typer.echo(usage_message(ctx.find_root().info_name or "stashd"))
        raise typer.Exit(USAGE_EXIT_CODE)

    try:
        config = load_config()
    except GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    configure_logging(config.debug)

    diff_options = list(invocation.diff_options)
    if should_use_color(config, stdout_is_terminal(), os.environ.get("TERM")):
        diff_options.insert(0, COLOR_OPTION)

    try:
        # git must be running before the pager opens
        with stash_diff_lines(diff_options) as lines:
            with open_output(config.pager) as sink:
                count = write_lines(filter_stash_diff(lines, invocation.filenames), sink)
        logger.debug("Wrote %d line(s)", count)
    except (GitError, PagerError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except BrokenPipeError:
        # The reader went away (pager quit or pipe closed)
        logger.debug("Output closed early")
        if not config.pager:
            discard_stdout()
