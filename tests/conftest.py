"""Shared test fixtures and configuration."""

import io
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_stash_dump():
    """Sample `git stash list -p` output with two stashes."""
    return [
        "stash@{0}: WIP on main: 1234567 Add greeting",
        "diff --git a/src/app.py b/src/app.py",
        "index 1111111..2222222 100644",
        "--- a/src/app.py",
        "+++ b/src/app.py",
        "@@ -1,2 +1,3 @@",
        " def main():",
        "+    print('hello')",
        "diff --git a/README.md b/README.md",
        "index 3333333..4444444 100644",
        "--- a/README.md",
        "+++ b/README.md",
        "@@ -1 +1 @@",
        "-Old title",
        "+New title",
        "stash@{1}: On feature: tweak docs",
        "diff --git a/docs/index.md b/docs/index.md",
        "index 5555555..6666666 100644",
        "--- a/docs/index.md",
        "+++ b/docs/index.md",
        "@@ -1 +1 @@",
        "-intro",
        "+introduction",
    ]


@pytest.fixture
def colored_stash_dump():
    """Stash dump as produced with --color=always."""
    return [
        "stash@{0}: WIP on main: 1234567 Add greeting",
        "\x1b[1mdiff --git a/src/app.py b/src/app.py\x1b[m",
        "\x1b[1mindex 1111111..2222222 100644\x1b[m",
        "\x1b[32m+    print('hello')\x1b[m",
        "\x1b[1mdiff --git a/README.md b/README.md\x1b[m",
        "\x1b[32m+New title\x1b[m",
    ]


@pytest.fixture
def fake_git_process():
    """Build a fake git Popen whose stdout yields the given lines."""

    def _make(lines, returncode=0):
        data = "".join(line + "\n" for line in lines).encode("utf-8")
        proc = MagicMock()
        proc.stdout = io.BytesIO(data)
        proc.wait.return_value = returncode
        return proc

    return _make
