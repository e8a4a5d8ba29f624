"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For builders and mock collaborators, see tests/fixtures and tests/mocks.
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring a database (deselect with '-m \"not db\"')"
    )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Point config loading at an empty file so a local config.yaml or env never leaks into tests."""
    empty_config = tmp_path / "config.yaml"
    empty_config.write_text("{}\n")
    monkeypatch.setenv("VOLIO_CONFIG", str(empty_config))
    for var in ("DATABASE_URL", "WEB_HOST", "WEB_PORT"):
        monkeypatch.delenv(var, raising=False)

    from web.backend.config import get_config
    get_config.cache_clear()
    yield
    get_config.cache_clear()
