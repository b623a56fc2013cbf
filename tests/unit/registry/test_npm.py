"""Unit tests for NpmRegistry.

Tests for the npm CLI registry client with run_command mocked.
"""

import json
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from cjsmirror.core.errors import RegistryError
from cjsmirror.registry.npm import NpmRegistry
from cjsmirror.utils.shell import CommandResult


def _ok(stdout: str = "") -> CommandResult:
    return CommandResult(stdout=stdout, stderr="", returncode=0)


def _fail(stdout: str = "", stderr: str = "", returncode: int = 1) -> CommandResult:
    return CommandResult(stdout=stdout, stderr=stderr, returncode=returncode)


class TestNpmRegistry:
    """Tests for NpmRegistry class."""

    @pytest.fixture
    def registry(self) -> NpmRegistry:
        """Create NpmRegistry instance."""
        return NpmRegistry()

    def test_is_available(self, registry: NpmRegistry) -> None:
        """is_available checks for the npm executable."""
        with patch("cjsmirror.registry.npm.command_exists", return_value=True) as mock_exists:
            assert registry.is_available() is True

        mock_exists.assert_called_once_with("npm")

    def test_custom_npm_command(self) -> None:
        """A custom npm executable is used for commands."""
        registry = NpmRegistry(npm_command="/opt/node/bin/npm", timeout=30.0)

        with patch("cjsmirror.registry.npm.run_command", return_value=_ok('["1.0.0"]')) as mock_run:
            registry.list_versions("hyperapp")

        args = mock_run.call_args[0][0]
        assert args[0] == "/opt/node/bin/npm"
        assert mock_run.call_args.kwargs["timeout"] == 30.0


class TestListVersions:
    """Tests for NpmRegistry.list_versions."""

    @patch("cjsmirror.registry.npm.run_command")
    def test_parses_version_list(self, mock_run: MagicMock, npm_versions_json: str) -> None:
        """The JSON version list is returned in registry order."""
        mock_run.return_value = _ok(npm_versions_json)

        listing = NpmRegistry().list_versions("hyperapp")

        assert listing.found is True
        assert listing.versions == ("1.0.0", "2.0.0-beta.1", "1.1.0", "2.0.0")
        mock_run.assert_called_once_with(
            ["npm", "view", "hyperapp", "versions", "--json"], timeout=None, cwd=None
        )

    @patch("cjsmirror.registry.npm.run_command")
    def test_single_version_is_string(self, mock_run: MagicMock) -> None:
        """npm reports a lone version as a bare string."""
        mock_run.return_value = _ok('"1.0.0"\n')

        listing = NpmRegistry().list_versions("hyperapp-cjs")

        assert listing.versions == ("1.0.0",)

    @patch("cjsmirror.registry.npm.run_command")
    def test_json_e404_is_not_found(self, mock_run: MagicMock, npm_e404_json: str) -> None:
        """An E404 JSON error payload yields a not-found listing."""
        mock_run.return_value = _fail(stdout=npm_e404_json, stderr="npm error code E404")

        listing = NpmRegistry().list_versions("hyperapp-cjs")

        assert listing.found is False
        assert listing.versions == ()

    @patch("cjsmirror.registry.npm.run_command")
    def test_legacy_text_404_is_not_found(self, mock_run: MagicMock) -> None:
        """The legacy npm 404 message yields a not-found listing."""
        mock_run.return_value = _fail(
            stderr="npm ERR! 404 'hyperapp-cjs' is not in the npm registry."
        )

        listing = NpmRegistry().list_versions("hyperapp-cjs")

        assert listing.found is False

    @patch("cjsmirror.registry.npm.run_command")
    def test_other_errors_raise(self, mock_run: MagicMock) -> None:
        """Non-404 failures raise RegistryError."""
        mock_run.return_value = _fail(
            stdout=json.dumps({"error": {"code": "EAI_AGAIN", "summary": "request failed"}}),
            stderr="npm error code EAI_AGAIN",
        )

        with pytest.raises(RegistryError, match="EAI_AGAIN"):
            NpmRegistry().list_versions("hyperapp")

    @patch("cjsmirror.registry.npm.run_command")
    def test_unexpected_output_raises(self, mock_run: MagicMock) -> None:
        """Output that is not a version list raises RegistryError."""
        mock_run.return_value = _ok('{"latest": "2.0.0"}')

        with pytest.raises(RegistryError, match="Unexpected npm view output"):
            NpmRegistry().list_versions("hyperapp")

    @patch("cjsmirror.registry.npm.run_command")
    def test_invalid_json_raises(self, mock_run: MagicMock) -> None:
        """Garbage output raises RegistryError."""
        mock_run.return_value = _ok("npm WARN something\n")

        with pytest.raises(RegistryError):
            NpmRegistry().list_versions("hyperapp")

    @patch("cjsmirror.registry.npm.run_command")
    def test_missing_npm_raises(self, mock_run: MagicMock) -> None:
        """A missing npm executable raises RegistryError."""
        mock_run.side_effect = FileNotFoundError("npm")

        with pytest.raises(RegistryError, match="not found"):
            NpmRegistry().list_versions("hyperapp")

    @patch("cjsmirror.registry.npm.run_command")
    def test_timeout_raises(self, mock_run: MagicMock) -> None:
        """A timeout raises RegistryError."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["npm"], timeout=30)

        with pytest.raises(RegistryError, match="timed out"):
            NpmRegistry(timeout=30).list_versions("hyperapp")


class TestPack:
    """Tests for NpmRegistry.pack."""

    @patch("cjsmirror.registry.npm.run_command")
    def test_returns_tarball_from_stdout(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """The archive named on stdout is returned."""
        (tmp_path / "hyperapp-2.0.0.tgz").write_bytes(b"")
        mock_run.return_value = _ok("hyperapp-2.0.0.tgz\n")

        tarball = NpmRegistry().pack("hyperapp", "2.0.0", tmp_path)

        assert tarball == tmp_path / "hyperapp-2.0.0.tgz"
        mock_run.assert_called_once_with(
            ["npm", "pack", "hyperapp@2.0.0"], timeout=None, cwd=tmp_path
        )

    @patch("cjsmirror.registry.npm.run_command")
    def test_scoped_package_fallback_name(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """Without a file name on stdout, npm's naming scheme is used."""
        (tmp_path / "scope-lib-1.0.0.tgz").write_bytes(b"")
        mock_run.return_value = _ok("")

        tarball = NpmRegistry().pack("@scope/lib", "1.0.0", tmp_path)

        assert tarball.name == "scope-lib-1.0.0.tgz"

    @patch("cjsmirror.registry.npm.run_command")
    def test_failure_raises(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """npm pack failures raise RegistryError."""
        mock_run.return_value = _fail(stderr="npm error code ETARGET")

        with pytest.raises(RegistryError, match="npm pack hyperapp@9.9.9 failed"):
            NpmRegistry().pack("hyperapp", "9.9.9", tmp_path)

    @patch("cjsmirror.registry.npm.run_command")
    def test_missing_archive_raises(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """A successful exit without the archive raises RegistryError."""
        mock_run.return_value = _ok("hyperapp-2.0.0.tgz\n")

        with pytest.raises(RegistryError, match="did not produce"):
            NpmRegistry().pack("hyperapp", "2.0.0", tmp_path)


class TestPublish:
    """Tests for NpmRegistry.publish."""

    @patch("cjsmirror.registry.npm.run_command")
    def test_publish(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """npm publish runs inside the package directory."""
        mock_run.return_value = _ok("+ hyperapp-cjs@2.0.0")

        NpmRegistry().publish(tmp_path)

        mock_run.assert_called_once_with(["npm", "publish"], timeout=None, cwd=tmp_path)

    @patch("cjsmirror.registry.npm.run_command")
    def test_dry_run(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """Dry-run mode passes --dry-run."""
        mock_run.return_value = _ok()

        NpmRegistry(dry_run=True).publish(tmp_path)

        assert mock_run.call_args[0][0] == ["npm", "publish", "--dry-run"]

    @patch("cjsmirror.registry.npm.run_command")
    def test_failure_raises(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """Publish failures raise RegistryError with npm's message."""
        mock_run.return_value = _fail(
            stderr="npm error code E403\nnpm error 403 You cannot publish over 2.0.0"
        )

        with pytest.raises(RegistryError, match="E403"):
            NpmRegistry().publish(tmp_path)
