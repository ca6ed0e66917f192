"""Shared pytest fixtures for the VLD test suite."""

import pytest

from vld.settings import ENV_MAPPING, reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings, unaffected by the environment."""
    for env_var in ENV_MAPPING:
        monkeypatch.delenv(env_var, raising=False)
    reset_settings()
    yield
    reset_settings()
