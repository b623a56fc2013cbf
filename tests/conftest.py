"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. Test doubles
live in fakes.py.
"""

import json

import pytest
from cjsmirror.core.config import MirrorConfig


@pytest.fixture
def mirror_config() -> MirrorConfig:
    """Default mirror configuration."""
    return MirrorConfig()


@pytest.fixture
def npm_versions_json() -> str:
    """Sample npm view <pkg> versions --json output."""
    return json.dumps(["1.0.0", "2.0.0-beta.1", "1.1.0", "2.0.0"])


@pytest.fixture
def npm_e404_json() -> str:
    """npm 7+ JSON error payload for an unknown package."""
    return json.dumps(
        {
            "error": {
                "code": "E404",
                "summary": "Not Found - GET https://registry.npmjs.org/hyperapp-cjs - Not found",
                "detail": "'hyperapp-cjs@*' is not in this registry.",
            }
        }
    )
