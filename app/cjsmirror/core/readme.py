"""README generation for mirror packages."""

from pathlib import Path

from cjsmirror.core.config import MirrorConfig
from cjsmirror.core.workspace import write_text_atomic

README_NAME = "README.md"

_TEMPLATE = """\
# `{mirror}`

{description_line}

If you don't know what this is, you probably don't need it.

Original readme at ({original_url}).
"""


def render_readme(config: MirrorConfig, version: str) -> str:
    """Render the README published with a mirrored version.

    Args:
        config: Mirror configuration.
        version: Version being mirrored.

    Returns:
        Markdown text.
    """
    description_line = (
        f"A mirror of [{config.upstream_name}]({config.upstream_url}), "
        "transpiled from a MJS to a CJS using Babel."
    )
    return _TEMPLATE.format(
        mirror=config.mirror_package,
        description_line=description_line,
        original_url=config.source_page_url(version),
    )


def write_readme(package_dir: Path, config: MirrorConfig, version: str) -> Path:
    """Overwrite the package's README with the mirror README.

    Returns:
        Path to the written README.
    """
    path = package_dir / README_NAME
    write_text_atomic(path, render_readme(config, version))
    return path
