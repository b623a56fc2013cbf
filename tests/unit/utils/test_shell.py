"""Unit tests for shell execution utilities."""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from cjsmirror.utils.shell import CommandResult, command_exists, run_command


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_success(self) -> None:
        """Exit code 0 is success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True
        assert CommandResult(stdout="", stderr="", returncode=1).success is False

    def test_output_joins_streams(self) -> None:
        """output combines non-empty stdout and stderr."""
        result = CommandResult(stdout="out\n", stderr="  err ", returncode=1)

        assert result.output == "out\nerr"

    def test_output_skips_empty_streams(self) -> None:
        """Empty streams are left out of output."""
        assert CommandResult(stdout="", stderr="err", returncode=1).output == "err"


class TestRunCommand:
    """Tests for run_command function."""

    @patch("cjsmirror.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """stdout, stderr and exit code are returned."""
        mock_run.return_value = MagicMock(stdout="1.0.0\n", stderr="", returncode=0)

        result = run_command(["npm", "--version"])

        assert result == CommandResult(stdout="1.0.0\n", stderr="", returncode=0)
        kwargs = mock_run.call_args.kwargs
        assert kwargs["capture_output"] is True
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"
        assert kwargs["timeout"] is None
        assert kwargs["cwd"] is None

    @patch("cjsmirror.utils.shell.subprocess.run")
    def test_passes_cwd_as_string(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """A Path cwd is passed to subprocess as a string."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["ls"], cwd=tmp_path, timeout=5.0)

        assert mock_run.call_args.kwargs["cwd"] == str(tmp_path)
        assert mock_run.call_args.kwargs["timeout"] == 5.0

    def test_runs_real_process(self) -> None:
        """A real interpreter invocation is captured."""
        result = run_command([sys.executable, "-c", "print('hi')"])

        assert result.success
        assert result.stdout.strip() == "hi"

    def test_undecodable_output_is_replaced(self) -> None:
        """Bytes that are not UTF-8 become replacement characters."""
        result = run_command(
            [sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'npm \\xff ok')"]
        )

        assert result.success
        assert result.stdout == "npm � ok"

    def test_raises_file_not_found(self) -> None:
        """run_command raises FileNotFoundError for missing commands."""
        with pytest.raises(FileNotFoundError):
            run_command(["nonexistent_command_xyz_12345"])


class TestCommandExists:
    """Tests for command_exists function."""

    def test_existing_command(self) -> None:
        """A command found by shutil.which exists."""
        with patch("cjsmirror.utils.shell.shutil.which", return_value="/usr/bin/npm"):
            assert command_exists("npm") is True

    def test_missing_command(self) -> None:
        """A command not on PATH does not exist."""
        with patch("cjsmirror.utils.shell.shutil.which", return_value=None):
            assert command_exists("npm") is False
