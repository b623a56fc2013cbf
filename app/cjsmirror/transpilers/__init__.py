"""Module-format transpilers."""

from cjsmirror.transpilers.babel import BabelTranspiler
from cjsmirror.transpilers.base import Transpiler

__all__ = ["BabelTranspiler", "Transpiler"]
