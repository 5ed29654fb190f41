"""Fixtures for the HTTP adapter tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from xsspage.api import create_app
from xsspage.config import AppConfig


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    """Small limits so the size checks are cheap to hit."""
    return AppConfig(
        max_payload_length=200,
        default_limit=1,
        max_limit=50,
        default_generate_count=5,
        max_code_length=500,
        progress_path=tmp_path / "progress.json",
    )


@pytest.fixture
def app(config: AppConfig) -> Flask:
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()
