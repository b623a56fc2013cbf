"""Abstract base class for module-format transpilers."""

from abc import ABC, abstractmethod
from pathlib import Path


class Transpiler(ABC):
    """Converts an ES-module source file to CommonJS.

    Example:
        >>> transpiler = BabelTranspiler()
        >>> code = transpiler.transform_file(Path("package/index.js"))
    """

    @abstractmethod
    def transform_file(self, path: Path) -> str:
        """Transform one file and return the resulting source text.

        The file itself is not modified.

        Args:
            path: ES-module source file.

        Returns:
            Transformed CommonJS source.

        Raises:
            TranspileError: If the transform fails.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the transpiler tooling is available on the system."""
