"""npm registry client implementation.

Drives the npm CLI for version listing, archive download and publishing.
Authentication and registry selection come from the user's npm
configuration.
"""

import json
import logging
import subprocess
from pathlib import Path

from cjsmirror.core.errors import RegistryError
from cjsmirror.models.version import VersionListing
from cjsmirror.registry.base import Registry
from cjsmirror.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

# npm error code for packages or versions missing from the registry
_NOT_FOUND_CODE = "E404"

# Legacy npm (< 7) text for a package missing from the registry
_NOT_FOUND_TEXT = "is not in the npm registry"


class NpmRegistry(Registry):
    """Registry backed by the npm command-line client.

    Attributes:
        dry_run: If True, npm publish runs with --dry-run.
    """

    def __init__(
        self,
        dry_run: bool = False,
        *,
        npm_command: str = "npm",
        timeout: float | None = None,
    ) -> None:
        """Initialize the npm registry client.

        Args:
            dry_run: If True, publish with --dry-run.
            npm_command: npm executable to invoke.
            timeout: Per-command timeout in seconds, None for no limit.
        """
        super().__init__(dry_run=dry_run)
        self._npm = npm_command
        self._timeout = timeout

    def is_available(self) -> bool:
        """Check if the npm executable is available."""
        return command_exists(self._npm)

    def list_versions(self, package: str) -> VersionListing:
        """List published versions using npm view.

        Args:
            package: Registry name of the package.

        Returns:
            VersionListing in registry order, or a not-found listing.

        Raises:
            RegistryError: If npm fails for any reason other than E404,
                or prints something that is not a version list.
        """
        result = self._npm_run(["view", package, "versions", "--json"])

        if not result.success:
            if _is_not_found(result):
                logger.info("Package %s is not published", package)
                return VersionListing.not_found(package)
            msg = f"npm view {package} failed: {result.output or 'unknown error'}"
            raise RegistryError(msg)

        return VersionListing(package=package, versions=_parse_versions(package, result.stdout))

    def pack(self, package: str, version: str, directory: Path) -> Path:
        """Download a package archive using npm pack.

        Args:
            package: Registry name of the package.
            version: Exact version to fetch.
            directory: Directory npm pack runs in and writes the archive to.

        Returns:
            Path to the downloaded archive.

        Raises:
            RegistryError: If npm pack fails or the archive is not created.
        """
        spec = f"{package}@{version}"
        result = self._npm_run(["pack", spec], cwd=directory)
        if not result.success:
            msg = f"npm pack {spec} failed: {result.output or 'unknown error'}"
            raise RegistryError(msg)

        tarball = directory / _tarball_name(result.stdout, package, version)
        if not tarball.is_file():
            msg = f"npm pack {spec} did not produce {tarball.name}"
            raise RegistryError(msg)
        return tarball

    def publish(self, package_dir: Path) -> None:
        """Publish a package directory using npm publish.

        Raises:
            RegistryError: If npm publish fails.
        """
        args = ["publish"]
        if self.dry_run:
            args.append("--dry-run")

        result = self._npm_run(args, cwd=package_dir)
        if not result.success:
            msg = f"npm publish failed: {result.output or 'unknown error'}"
            raise RegistryError(msg)

    def _npm_run(self, args: list[str], cwd: Path | None = None) -> CommandResult:
        """Run an npm subcommand, wrapping launch failures as RegistryError."""
        command = [self._npm, *args]
        logger.info("Running %s (cwd=%s)", " ".join(command), cwd or ".")
        try:
            return run_command(command, timeout=self._timeout, cwd=cwd)
        except FileNotFoundError as e:
            msg = f"npm executable not found: {self._npm}"
            raise RegistryError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"{' '.join(command)} timed out after {e.timeout}s"
            raise RegistryError(msg) from e
        except OSError as e:
            msg = f"Cannot run {' '.join(command)}: {e}"
            raise RegistryError(msg) from e


def _is_not_found(result: CommandResult) -> bool:
    """Check whether a failed npm command reported E404.

    npm 7+ prints a JSON error object when --json is given; older clients
    only print text to stderr.
    """
    for stream in (result.stdout, result.stderr):
        try:
            payload = json.loads(stream)
        except ValueError:
            continue
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict) and error.get("code") == _NOT_FOUND_CODE:
                return True

    text = result.output
    return _NOT_FOUND_TEXT in text or f"code {_NOT_FOUND_CODE}" in text or "ERR! 404" in text


def _parse_versions(package: str, stdout: str) -> tuple[str, ...]:
    """Parse the output of npm view <pkg> versions --json.

    A package with exactly one version is reported as a bare string.

    Raises:
        RegistryError: If the output is not a string or list of strings.
    """
    try:
        data = json.loads(stdout) if stdout.strip() else []
    except json.JSONDecodeError as e:
        msg = f"Unexpected npm view output for {package}: {e}"
        raise RegistryError(msg) from e

    if isinstance(data, str):
        return (data,)
    if isinstance(data, list) and all(isinstance(v, str) for v in data):
        return tuple(data)
    msg = f"Unexpected npm view output for {package}: {stdout[:200]!r}"
    raise RegistryError(msg)


def _tarball_name(stdout: str, package: str, version: str) -> str:
    """Work out the archive file name written by npm pack.

    npm prints the file name as the last line of stdout. If that is missing,
    fall back to npm's naming scheme: scope "@" dropped and "/" replaced by "-".
    """
    lines = [line.strip() for line in stdout.splitlines() if line.strip()]
    if lines and lines[-1].endswith(".tgz"):
        return lines[-1]
    return f"{package.lstrip('@').replace('/', '-')}-{version}.tgz"
