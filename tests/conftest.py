"""Pytest configuration and fixtures for code-guard tests."""

from pathlib import Path

import pytest


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty working directory (where reports land)."""
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Flat INI config as written by hand."""
    path = tmp_path / "config.ini"
    path.write_text(
        "APIServer = http://localhost:8000/v1\n"
        "Model = test-model\n"
        "API_KEY = file-key\n"
        "Language = en\n"
    )
    return path
