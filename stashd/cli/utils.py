"""Shared utility functions for the CLI."""

import logging
import sys
from dataclasses import dataclass, field


HELP_FLAGS = ("-h", "--help")
END_OF_OPTIONS = "--"
COLOR_OPTION = "--color=always"


@dataclass
class Invocation:
    """Command line split into git options and filename patterns."""

    diff_options: list[str] = field(default_factory=list)
    filenames: list[str] = field(default_factory=list)
    show_help: bool = False


def parse_arguments(args: list[str]) -> Invocation:
    """Split the raw arguments into pass-through options and filenames.

    Arguments that start with "-" (and are longer than just "-") before
    the first bare "--" are handed to git unchanged. Everything else,
    including whatever follows "--", is a filename pattern. A help flag
    anywhere requests the usage message.

    Args:
        args: Command line arguments, without the program name.

    Returns:
        The parsed Invocation.
    """
    invocation = Invocation()
    options_done = False

    for arg in args:
        if arg in HELP_FLAGS:
            invocation.show_help = True
            continue
        if not options_done and arg == END_OF_OPTIONS:
            options_done = True
            continue
        if not options_done and len(arg) >= 2 and arg.startswith("-"):
            invocation.diff_options.append(arg)
        else:
            invocation.filenames.append(arg)

    return invocation


def usage_message(prog_name: str) -> str:
    """Return the one-line usage message."""
    return f"Usage: {prog_name} [<diff options>] [--] filename..."


def stdout_is_terminal() -> bool:
    """Check whether standard output is attached to a terminal."""
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def configure_logging(debug: bool) -> None:
    """Send log records to stderr, at DEBUG level when debug is enabled."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="stashd: %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
