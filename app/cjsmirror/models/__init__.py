"""Data models for cjsmirror.

This module exports the core data structures used throughout the application.
"""

from cjsmirror.models.outcome import Outcome
from cjsmirror.models.version import VersionListing

__all__ = [
    "Outcome",
    "VersionListing",
]
