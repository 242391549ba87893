"""Tests for stashd.git module."""

import io
import subprocess
from unittest.mock import MagicMock

import pytest

from stashd.git import (
    GitError,
    build_stash_command,
    iter_lines,
    start_stash_list,
    stash_diff_lines,
)


class TestBuildStashCommand:
    """Tests for build_stash_command function."""

    def test_base_command(self):
        """Test the command without extra options."""
        assert build_stash_command([]) == ["git", "stash", "list", "-p"]

    def test_options_appended_in_order(self):
        """Test that pass-through options follow the base command."""
        result = build_stash_command(["--color=always", "--stat", "-w"])
        assert result == ["git", "stash", "list", "-p", "--color=always", "--stat", "-w"]


class TestStartStashList:
    """Tests for start_stash_list function."""

    def test_pipes_stdout_only(self, mocker):
        """Test that only stdout is piped; stderr is inherited."""
        mock_popen = mocker.patch("subprocess.Popen")

        start_stash_list(["--stat"])

        mock_popen.assert_called_once_with(
            ["git", "stash", "list", "-p", "--stat"],
            stdout=subprocess.PIPE,
        )

    def test_git_not_found_raises_error(self, mocker):
        """Test that missing git raises GitError."""
        mocker.patch("subprocess.Popen", side_effect=FileNotFoundError())

        with pytest.raises(GitError) as exc_info:
            start_stash_list([])

        assert "not installed" in str(exc_info.value)

    def test_os_error_raises_error(self, mocker):
        """Test that other spawn failures raise GitError."""
        mocker.patch("subprocess.Popen", side_effect=PermissionError("denied"))

        with pytest.raises(GitError) as exc_info:
            start_stash_list([])

        assert "Error starting git" in str(exc_info.value)


class TestIterLines:
    """Tests for iter_lines function."""

    def test_strips_newlines(self):
        """Test that trailing newlines are removed."""
        stream = io.BytesIO(b"stash@{0}: WIP\n\n+x\n")
        assert list(iter_lines(stream)) == ["stash@{0}: WIP", "", "+x"]

    def test_strips_carriage_return(self):
        """Test that CRLF line endings are removed."""
        stream = io.BytesIO(b"+a\r\n+b\r\n")
        assert list(iter_lines(stream)) == ["+a", "+b"]

    def test_last_line_without_newline(self):
        """Test that an unterminated last line is still returned."""
        stream = io.BytesIO(b"+a\n+b")
        assert list(iter_lines(stream)) == ["+a", "+b"]

    def test_invalid_utf8_kept(self):
        """Test that invalid UTF-8 is kept as surrogate escapes."""
        stream = io.BytesIO(b"+caf\xe9\n")
        line = next(iter_lines(stream))
        assert line.encode("utf-8", "surrogateescape") == b"+caf\xe9"


class TestStashDiffLines:
    """Tests for stash_diff_lines context manager."""

    def test_yields_lines_and_waits(self, mocker, fake_git_process):
        """Test that lines are yielded and git is waited on."""
        proc = fake_git_process(["stash@{0}: WIP", "+x"])
        mocker.patch("stashd.git.runner.start_stash_list", return_value=proc)

        with stash_diff_lines([]) as lines:
            result = list(lines)

        assert result == ["stash@{0}: WIP", "+x"]
        proc.wait.assert_called_once()
        proc.terminate.assert_not_called()
        assert proc.stdout.closed

    def test_nonzero_exit_is_ignored(self, mocker, fake_git_process):
        """Test that a failing git does not raise."""
        proc = fake_git_process(["+x"], returncode=128)
        mocker.patch("stashd.git.runner.start_stash_list", return_value=proc)

        with stash_diff_lines([]) as lines:
            result = list(lines)

        assert result == ["+x"]

    def test_terminates_on_early_exit(self, mocker, fake_git_process):
        """Test that git is terminated when the caller fails."""
        proc = fake_git_process(["+x"])
        mocker.patch("stashd.git.runner.start_stash_list", return_value=proc)

        with pytest.raises(BrokenPipeError):
            with stash_diff_lines([]):
                raise BrokenPipeError()

        proc.terminate.assert_called_once()
        proc.wait.assert_called_once()

    def test_passes_options(self, mocker):
        """Test that options reach start_stash_list."""
        proc = MagicMock()
        proc.stdout = io.BytesIO(b"")
        proc.wait.return_value = 0
        mock_start = mocker.patch("stashd.git.runner.start_stash_list", return_value=proc)

        with stash_diff_lines(["--stat"]) as lines:
            list(lines)

        mock_start.assert_called_once_with(["--stat"])
