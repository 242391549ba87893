"""Output sink: standard output or an external pager.

Contains:
- PagerError: Raised when the pager process cannot be started
- start_pager: Start the pager as a shell command with a stdin pipe
- open_output: Context manager yielding the binary sink to write to
- discard_stdout: Redirect stdout to devnull once its reader is gone
"""

import logging
import os
import subprocess
import sys
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

import typer

logger = logging.getLogger(__name__)

SHELL = "/bin/sh"


class PagerError(Exception):
    """Raised when the pager cannot be started."""

    pass


def start_pager(command: str) -> subprocess.Popen:
    """Start the pager through the shell.

    The pager inherits our stdout and stderr; only its stdin is piped.

    Args:
        command: Shell command line, e.g. the value of $PAGER.

    Returns:
        The running pager process.

    Raises:
        PagerError: If the pager cannot be started.
    """
    logger.debug("Starting pager: %s", command)
    try:
        return subprocess.Popen([SHELL, "-c", command], stdin=subprocess.PIPE)
    except OSError as e:
        raise PagerError(f"Error starting pager: {e}")


@contextmanager
def open_output(pager_command: Optional[str] = None) -> Iterator[BinaryIO]:
    """Open the sink that filtered lines are written to.

    Without a pager this is the binary standard output. With a pager, its
    stdin pipe is yielded; on exit the pipe is closed to signal end of
    input and the pager is waited on.

    Args:
        pager_command: Shell command for the pager, or None/empty for stdout.

    Yields:
        A binary, writable stream.

    Raises:
        PagerError: If the pager cannot be started.
    """
    if not pager_command:
        stream = typer.get_binary_stream("stdout")
        yield stream
        stream.flush()
        return

    proc = start_pager(pager_command)
    try:
        yield proc.stdin
    finally:
        try:
            proc.stdin.close()
        except BrokenPipeError:
            # The pager quit before reading everything
            pass
        proc.wait()


def discard_stdout() -> None:
    """Point stdout at devnull after the reading end of the pipe closed.

    Without this, the final flush at interpreter exit would fail again on
    the buffered leftovers.
    """
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        # stdout is not backed by a file descriptor (e.g. captured output)
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)
