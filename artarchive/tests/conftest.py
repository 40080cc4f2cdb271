"""
Pytest configuration for artarchive tests.
"""

import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Run every test against a known environment, never a local .env file."""
    monkeypatch.setattr("artarchive.src.config.load_env_file", lambda: None)
    for name in ("OPENAI_API_KEY", "OPENAI_MODEL", "DEEPL_API_KEY", "DEEPL_API_URL", "DEEPL_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear all registered caches before and after each test."""
    from artarchive.src.cache_registry import clear_all_caches

    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def openai_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")


@pytest.fixture
def deepl_key(monkeypatch):
    monkeypatch.setenv("DEEPL_API_KEY", "deepl-test-key")
