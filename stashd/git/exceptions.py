"""Git-related exception classes.

Contains:
- GitError: Raised when the git process cannot be started
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass
