"""Git process wrapper for stashd.

This package provides the producer side of the filter:
- exceptions: GitError
- runner: build_stash_command, start_stash_list, iter_lines, stash_diff_lines
"""

# Exceptions
from stashd.git.exceptions import GitError

# Runner utilities
from stashd.git.runner import (
    STASH_LIST_COMMAND,
    build_stash_command,
    iter_lines,
    start_stash_list,
    stash_diff_lines,
)


__all__ = [
    # Exceptions
    "GitError",
    # Runner
    "STASH_LIST_COMMAND",
    "build_stash_command",
    "iter_lines",
    "start_stash_list",
    "stash_diff_lines",
]
