"""Babel transpiler implementation.

Runs the Babel CLI with the CommonJS module-transform plugin and captures
the transformed code from stdout.

Babel resolves plugin names from the directory it runs in, and the unpacked
package has no node_modules. The plugin is therefore located once, with Node
running in the same environment as the Babel command, and passed to Babel as
an absolute path.
"""

import logging
import subprocess
from pathlib import Path

from cjsmirror.core.config import BABEL_PLUGIN, DEFAULT_BABEL_COMMAND
from cjsmirror.core.errors import TranspileError
from cjsmirror.transpilers.base import Transpiler
from cjsmirror.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)

# Prints the resolved entry file of the module named by argv[1]. npm exec puts
# <cache>/node_modules/.bin on PATH, so those node_modules are searched too.
RESOLVE_SCRIPT = """\
const path = require("path");
const bin = path.join("node_modules", ".bin");
const dirs = (process.env.PATH || "").split(path.delimiter).filter((d) => d.endsWith(bin));
const paths = [process.cwd(), ...dirs.map((d) => path.dirname(d))];
process.stdout.write(require.resolve(process.argv[1], { paths }));
"""


class BabelTranspiler(Transpiler):
    """Transpiler backed by @babel/cli.

    Project Babel configuration files inside the package are ignored
    (--no-babelrc), so only the module transform is applied.
    """

    def __init__(
        self,
        command: list[str] | None = None,
        plugin: str = BABEL_PLUGIN,
        *,
        timeout: float | None = None,
    ) -> None:
        """Initialize the transpiler.

        Args:
            command: Command line invoking the Babel CLI. Its last word is the
                Babel executable; anything before it is a launcher such as npx.
            plugin: Babel plugin to apply, as a package name or a file path.
            timeout: Timeout in seconds, None for no limit.
        """
        self._command = list(command or DEFAULT_BABEL_COMMAND)
        self._plugin = plugin
        self._timeout = timeout
        self._plugin_path: str | None = None

    def is_available(self) -> bool:
        """Check if the first word of the Babel command is on PATH."""
        return command_exists(self._command[0])

    def build_args(self, path: Path, plugin: str | None = None) -> list[str]:
        """Build the Babel command line for one file."""
        return [
            *self._command,
            "--no-babelrc",
            "--plugins",
            plugin or self._plugin,
            path.name,
        ]

    def build_resolve_args(self) -> list[str]:
        """Build the command line that prints the plugin's location."""
        return [*self._command[:-1], "node", "-e", RESOLVE_SCRIPT, self._plugin]

    def resolve_plugin(self) -> str:
        """Return the plugin as an absolute path Babel can load from anywhere.

        Plugins already given as a path are returned unchanged. A package name
        is resolved once per transpiler and cached.

        Raises:
            TranspileError: If the plugin cannot be located.
        """
        if self._plugin.startswith(".") or Path(self._plugin).is_absolute():
            return self._plugin
        if self._plugin_path is not None:
            return self._plugin_path

        logger.debug("Locating Babel plugin %s", self._plugin)
        try:
            result = run_command(self.build_resolve_args(), timeout=self._timeout)
        except FileNotFoundError as e:
            msg = f"Babel command not found: {self._command[0]}"
            raise TranspileError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"Locating {self._plugin} timed out after {e.timeout}s"
            raise TranspileError(msg) from e

        location = result.stdout.strip()
        if not result.success or not location:
            msg = f"Cannot locate Babel plugin {self._plugin}: {result.output or 'unknown error'}"
            raise TranspileError(msg)

        logger.debug("Babel plugin %s found at %s", self._plugin, location)
        self._plugin_path = location
        return location

    def transform_file(self, path: Path) -> str:
        """Transform a file with Babel.

        Babel runs from the file's directory with the plugin given as an
        absolute path.

        Raises:
            TranspileError: If Babel cannot be launched, times out or fails.
        """
        args = self.build_args(path, self.resolve_plugin())
        logger.info("Transpiling %s with %s", path, self._plugin)
        try:
            result = run_command(args, timeout=self._timeout, cwd=path.parent)
        except FileNotFoundError as e:
            msg = f"Babel command not found: {self._command[0]}"
            raise TranspileError(msg) from e
        except subprocess.TimeoutExpired as e:
            msg = f"Babel timed out after {e.timeout}s on {path.name}"
            raise TranspileError(msg) from e

        if not result.success:
            msg = f"Babel failed on {path.name}: {result.stderr.strip() or 'unknown error'}"
            raise TranspileError(msg)
        if not result.stdout.strip():
            msg = f"Babel produced no output for {path.name}"
            raise TranspileError(msg)
        return result.stdout
