"""
Shared fixtures for blobcommit tests.
"""

import pytest

from blobcommit.core.settings import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from BLOBCOMMIT_* variables in the outer environment."""
    for name in ("BLOBCOMMIT_DIGEST", "BLOBCOMMIT_ODD_NODE_POLICY", "BLOBCOMMIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
