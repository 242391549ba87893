"""Git stash list runner.

Contains:
- build_stash_command: Build the git command line for the stash dump
- start_stash_list: Start git with its stdout piped back to us
- iter_lines: Decode a byte stream into lines without newlines
- stash_diff_lines: Context manager yielding the lines of the stash dump
"""

import logging
import subprocess
from contextlib import contextmanager
from typing import BinaryIO, Iterator

from stashd.git.exceptions import GitError

logger = logging.getLogger(__name__)

STASH_LIST_COMMAND = ["stash", "list", "-p"]


def build_stash_command(diff_options: list[str]) -> list[str]:
    """Build the full git command for dumping stashes as patches.

    Args:
        diff_options: Extra options passed through to git verbatim.

    Returns:
        The argument vector, starting with "git".
    """
    return ["git"] + STASH_LIST_COMMAND + list(diff_options)


def start_stash_list(diff_options: list[str]) -> subprocess.Popen:
    """Start ``git stash list -p`` with the given options.

    git's stderr is left connected to ours so its own error messages reach
    the user untouched.

    Args:
        diff_options: Extra options passed through to git verbatim.

    Returns:
        The running process, with stdout available as a binary pipe.

    Raises:
        GitError: If git cannot be started.
    """
    command = build_stash_command(diff_options)
    logger.debug("Running %s", " ".join(command))
    try:
        return subprocess.Popen(command, stdout=subprocess.PIPE)
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    except OSError as e:
        raise GitError(f"Error starting git: {e}")


def iter_lines(stream: BinaryIO) -> Iterator[str]:
    """Read lines from a binary stream.

    Bytes that are not valid UTF-8 are kept as surrogate escapes so they
    can be written back out unchanged.

    Args:
        stream: The binary stream to read.

    Yields:
        Each line with its trailing newline (and carriage return) removed.
    """
    for raw in stream:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        yield raw.decode("utf-8", "surrogateescape")


@contextmanager
def stash_diff_lines(diff_options: list[str]) -> Iterator[Iterator[str]]:
    """Run git and yield the lines of its stash dump.

    The exit status of git is not checked; whatever it printed before
    failing is still filtered. If the caller stops early, git is
    terminated.

    Args:
        diff_options: Extra options passed through to git verbatim.

    Yields:
        An iterator over the output lines.

    Raises:
        GitError: If git cannot be started.
    """
    proc = start_stash_list(diff_options)
    try:
        yield iter_lines(proc.stdout)
    except BaseException:
        proc.terminate()
        raise
    finally:
        proc.stdout.close()
        returncode = proc.wait()
        if returncode != 0:
            logger.debug("git exited with status %d", returncode)
