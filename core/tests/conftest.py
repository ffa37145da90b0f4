import os

import pytest

from fluentsql.settings import reload_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Start every test from default settings."""
    for key in list(os.environ):
        if key.upper().startswith("FLUENTSQL_"):
            monkeypatch.delenv(key)
    yield reload_settings()
