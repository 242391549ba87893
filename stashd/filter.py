"""Stash diff stream filter.

Narrows the output of ``git stash list -p`` down to the file segments whose
path contains one of the requested filename substrings. Each stash header is
held back until a file under it matches, so stashes without a matching file
produce no output at all.

Contains:
- LineKind: Classification of a single input line
- classify_line: Classify a line and extract the diff file path
- any_match: Substring match of a path against the requested filenames
- StashFilter: Per-invocation state machine over the diff lines
- filter_stash_diff: Lazily filter an iterable of lines
- write_lines: Write filtered lines to a binary sink
"""

import logging
from enum import Enum
from typing import BinaryIO, Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

DIFF_PREFIX = "diff --git a/"
STASH_PREFIX = "stash@{"
ESCAPE = "\x1b"

# git wraps colored header lines in a fixed-width escape such as "\x1b[1m"
COLOR_PREFIX_WIDTH = 4

# Shorter lines cannot carry any header marker
MIN_HEADER_LENGTH = 11


class LineKind(Enum):
    """Kind of a line in the stash diff dump."""

    DIFF_HEADER = "diff_header"
    STASH_HEADER = "stash_header"
    ORDINARY = "ordinary"


def classify_line(line: str) -> tuple[LineKind, Optional[str]]:
    """Classify a single line of the stash diff dump.

    Args:
        line: The line without its trailing newline.

    Returns:
        Tuple of (kind, path). The path is everything after the
        ``diff --git a/`` marker for diff headers, and None otherwise.
    """
    if len(line) < MIN_HEADER_LENGTH:
        return LineKind.ORDINARY, None

    start = COLOR_PREFIX_WIDTH if line.startswith(ESCAPE) else 0
    end = start + len(DIFF_PREFIX)

    if len(line) > end and line[start:end] == DIFF_PREFIX:
        return LineKind.DIFF_HEADER, line[end:]
    if line.startswith(STASH_PREFIX):
        return LineKind.STASH_HEADER, None
    return LineKind.ORDINARY, None


def any_match(patterns: Iterable[str], path: str) -> bool:
    """Check whether any pattern is a substring of the path.

    Matching is case-sensitive and has no glob or path separator handling,
    so "foo" matches "barfoo.txt".

    Args:
        patterns: Filename substrings to look for.
        path: The path suffix of a diff header line.

    Returns:
        True if at least one pattern is contained in the path.
    """
    for pattern in patterns:
        if pattern in path:
            return True
    return False


class StashFilter:
    """Line-by-line filter over a stash diff dump.

    Holds the most recent unflushed stash header and whether lines of the
    current file segment are being emitted. Build a new instance per run.
    """

    def __init__(self, patterns: Iterable[str]):
        self.patterns = list(patterns)
        self.pending_header: Optional[str] = None
        self.dumping = False

    def feed(self, line: str) -> list[str]:
        """Process one input line.

        Args:
            line: The line without its trailing newline.

        Returns:
            The lines to emit for this input, in order. Usually empty or
            just the line itself; the first match under a stash also
            emits the held header and a blank separator.
        """
        output = []
        kind, path = classify_line(line)

        if kind is LineKind.DIFF_HEADER:
            self.dumping = False
            if any_match(self.patterns, path):
                if self.pending_header is not None:
                    logger.debug("Matched %r under %r", path, self.pending_header)
                    output.append(self.pending_header)
                    output.append("")
                    self.pending_header = None
                self.dumping = True
        elif kind is LineKind.STASH_HEADER:
            self.dumping = False
            self.pending_header = line

        if self.dumping:
            output.append(line)
        return output

    def filter(self, lines: Iterable[str]) -> Iterator[str]:
        """Lazily filter a sequence of lines."""
        for line in lines:
            yield from self.feed(line)


def filter_stash_diff(lines: Iterable[str], patterns: Iterable[str]) -> Iterator[str]:
    """Filter a stash diff dump down to the segments of matching files.

    Args:
        lines: The diff dump, one line per item, without newlines.
        patterns: Filename substrings to keep.

    Returns:
        A lazy iterator over the emitted lines, in input order.
    """
    return StashFilter(patterns).filter(lines)


def write_lines(lines: Iterable[str], sink: BinaryIO) -> int:
    """Write lines to a binary sink, one per output line.

    Lines are encoded back with surrogateescape so that bytes which were
    not valid UTF-8 in the input come out unchanged. Write errors
    propagate to the caller.

    Returns:
        Number of lines written.
    """
    count = 0
    for line in lines:
        sink.write(line.encode("utf-8", "surrogateescape") + b"\n")
        count += 1
    return count
