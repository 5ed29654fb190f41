"""Shared fixtures for CLI tests.

Every invocation goes through ``--config`` pointing at a YAML file in a
temporary directory, so no user config or progress file is touched.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A config file with a small payload cap and a temp progress file."""
    path = tmp_path / "xsspage.yaml"
    path.write_text(
        "max_payload_length: 200\n"
        "max_code_length: 500\n"
        f"progress_path: {tmp_path / 'progress.json'}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def invoke(runner: CliRunner, config_file: Path):
    """Invoke the CLI with the temporary config file."""
    from xsspage.cli.main import cli

    def _invoke(*args: str, **kwargs):
        return runner.invoke(cli, ["--config", str(config_file), *args], **kwargs)

    return _invoke


@pytest.fixture
def vulnerable_js(tmp_path: Path) -> Path:
    path = tmp_path / "app.js"
    path.write_text("div.innerHTML = location.hash;\n", encoding="utf-8")
    return path


@pytest.fixture
def clean_js(tmp_path: Path) -> Path:
    path = tmp_path / "clean.js"
    path.write_text("el.textContent = 'hello';\n", encoding="utf-8")
    return path
