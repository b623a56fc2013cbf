"""Package registry clients."""

from cjsmirror.registry.base import Registry
from cjsmirror.registry.npm import NpmRegistry

__all__ = ["NpmRegistry", "Registry"]
