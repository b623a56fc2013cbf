"""Mirror pipeline orchestration.

Runs the complete mirroring workflow in one sequential pass:
workspace setup -> version discovery -> diff -> per-version mirroring
-> teardown.

Each missing version goes through fetch -> inspect -> (skip | rewrite
manifest -> README -> transpile -> delete maps -> publish), newest first.
The first failure aborts the run; versions already published stay
published and a rerun picks up where this one stopped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from cjsmirror.core.archive import extract_archive
from cjsmirror.core.config import MirrorConfig
from cjsmirror.core.diff import MirrorDiff, compute_diff
from cjsmirror.core.errors import MirrorError
from cjsmirror.core.manifest import (
    MANIFEST_NAME,
    is_es_module,
    load_manifest,
    main_entry,
    transform_manifest,
    write_manifest,
)
from cjsmirror.core.readme import README_NAME, write_readme
from cjsmirror.core.workspace import (
    delete_map_files,
    run_workspace,
    version_directory,
    write_text_atomic,
)
from cjsmirror.models.outcome import Outcome
from cjsmirror.registry.base import Registry
from cjsmirror.registry.npm import NpmRegistry
from cjsmirror.transpilers.babel import BabelTranspiler
from cjsmirror.transpilers.base import Transpiler

logger = logging.getLogger(__name__)

# Receives a progress message and its nesting depth
Narrator = Callable[[str, int], None]


def _log_narrator(message: str, depth: int = 0) -> None:
    logger.info("%s%s", "  " * depth, message)


class MirrorPipeline:
    """Mirrors every unmirrored source version to the mirror package.

    The pipeline does not print or exit by itself: progress goes to the
    narrator callback and the result is returned as an Outcome.

    Example:
        >>> pipeline = MirrorPipeline(MirrorConfig(), NpmRegistry(), BabelTranspiler())
        >>> outcome = pipeline.run()
        >>> outcome.published
        ('2.0.0', '1.1.0')
    """

    def __init__(
        self,
        config: MirrorConfig,
        registry: Registry,
        transpiler: Transpiler,
        *,
        narrate: Narrator | None = None,
        temp_base: Path | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: Mirror configuration.
            registry: Registry used for listing, fetching and publishing.
            transpiler: Module-format transpiler.
            narrate: Progress callback; defaults to INFO logging.
            temp_base: Directory for the run workspace; defaults to the system temp dir.
        """
        self.config = config
        self.registry = registry
        self.transpiler = transpiler
        self._narrate = narrate or _log_narrator
        self._temp_base = temp_base

    def discover(self) -> MirrorDiff:
        """List source and mirror versions and compute what is missing.

        Returns:
            MirrorDiff with the missing versions newest first.

        Raises:
            RegistryError: If either listing fails for a reason other than not-found.
        """
        source_name = self.config.source_package
        mirror_name = self.config.mirror_package

        self._narrate(f"Listing {source_name} versions...", 0)
        source = self.registry.list_versions(source_name)
        if not source.found:
            self._narrate(f"{source_name} is not published; nothing to mirror.", 1)

        self._narrate(f"Listing {mirror_name} versions...", 0)
        mirror = self.registry.list_versions(mirror_name)
        if not mirror.found:
            self._narrate("The package is not yet published.", 1)

        return compute_diff(source, mirror)

    def run(self) -> Outcome:
        """Run the full pipeline.

        Returns:
            Outcome describing what was published and skipped, or the
            failure that aborted the run.
        """
        published: list[str] = []
        skipped: list[str] = []

        try:
            self._narrate("Creating temporary directory...", 0)
            with run_workspace(self._temp_base) as root:
                diff = self.discover()
                if diff.is_in_sync:
                    self._narrate("All versions are already mirrored.", 0)

                for version in diff.missing:
                    if self.mirror_version(version, root):
                        published.append(version)
                    else:
                        skipped.append(version)

                self._narrate("Cleaning up temporary directory...", 0)
        except (MirrorError, OSError, RuntimeError) as e:
            logger.debug("Mirror run aborted", exc_info=True)
            return Outcome.failed(str(e), tuple(published), tuple(skipped))

        return Outcome.succeeded(tuple(published), tuple(skipped))

    def mirror_version(self, version: str, root: Path) -> bool:
        """Mirror one version inside a fresh directory under ``root``.

        The version directory is removed afterwards, also when a step fails.

        Args:
            version: Source version to mirror.
            root: Run workspace root.

        Returns:
            True if the version was published, False if it was skipped.
        """
        self._narrate(f'Version "{version}"...', 0)
        self._narrate("Creating directory...", 1)
        with version_directory(root) as directory:
            try:
                return self._mirror_into(version, directory)
            finally:
                self._narrate("Deleting directory...", 1)

    def _mirror_into(self, version: str, directory: Path) -> bool:
        """Fetch, transform and publish one version in ``directory``."""
        self._narrate("Retrieving...", 1)
        tarball = self.registry.pack(self.config.source_package, version, directory)

        self._narrate("Decompressing...", 1)
        package_dir = extract_archive(tarball, directory)

        self._narrate(f"Reading {MANIFEST_NAME}...", 1)
        manifest_path = package_dir / MANIFEST_NAME
        manifest = load_manifest(manifest_path)

        if not is_es_module(manifest):
            self._narrate("This is not a MJS package.", 1)
            logger.info(
                "Skipping %s@%s: not an ES-module package",
                self.config.source_package,
                version,
            )
            return False

        # Validate before anything is written
        entry = main_entry(manifest, package_dir)

        self._narrate("Replacing content...", 1)
        mirrored = transform_manifest(manifest, self.config)

        self._narrate(f"Writing {MANIFEST_NAME}...", 1)
        write_manifest(manifest_path, mirrored)

        self._narrate(f"Writing {README_NAME}...", 1)
        write_readme(package_dir, self.config, version)

        self._narrate("Converting MJS to CJS...", 1)
        code = self.transpiler.transform_file(entry)

        self._narrate("Writing...", 1)
        write_text_atomic(entry, code)

        self._narrate("Deleting map files...", 1)
        delete_map_files(directory, self.config.map_pattern)

        self._narrate("Publishing...", 1)
        self.registry.publish(package_dir)
        return True


def build_pipeline(
    config: MirrorConfig,
    *,
    dry_run: bool = False,
    narrate: Narrator | None = None,
) -> MirrorPipeline:
    """Create a pipeline wired to npm and Babel from a configuration.

    Args:
        config: Mirror configuration.
        dry_run: If True, publish with npm's --dry-run.
        narrate: Progress callback.

    Returns:
        Configured MirrorPipeline.
    """
    timeout = float(config.timeout_seconds) if config.timeout_seconds is not None else None
    registry = NpmRegistry(dry_run=dry_run, npm_command=config.npm_command, timeout=timeout)
    transpiler = BabelTranspiler(config.babel_command, config.babel_plugin, timeout=timeout)
    return MirrorPipeline(config, registry, transpiler, narrate=narrate)
