"""Shared fixtures for xsspage tests."""

import pytest


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep a user's $XSSPAGE_CONFIG or ./xsspage.yaml out of the tests."""
    monkeypatch.delenv("XSSPAGE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
