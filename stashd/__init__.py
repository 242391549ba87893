"""Filter git stash diffs down to selected files."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("stashd")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
