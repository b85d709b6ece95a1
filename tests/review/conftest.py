"""
Shared fixtures for review pipeline tests.

The chat model is always faked; no test talks to a real API.
"""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock

import pytest


# =============================================================================
# FILE TREE FIXTURES
# =============================================================================

@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """
    Create a small project tree with reviewable and skipped files.

    Reviewable: a.go, src/app.py, src/util.ts, web/index.html
    Skipped: a.go.lock, README.md, .git/config, LICENSE, image.png, go.sum
    """
    root = tmp_path / "project"
    files = {
        "a.go": "package main\n\nfunc main() {}\n",
        "a.go.lock": "locked\n",
        "README.md": "# Project\n",
        "LICENSE": "MIT\n",
        "go.sum": "github.com/x v1.0.0 h1:abc\n",
        "image.png": "not really a png\n",
        ".git/config": "[core]\n",
        "src/app.py": "def handler(event):\n    return {'ok': True}\n",
        "src/util.ts": "export const add = (a: number, b: number) => a + b;\n",
        "web/index.html": "<html><body>{{ title }}</body></html>\n",
    }
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


# =============================================================================
# MOCK MODEL FIXTURES
# =============================================================================

@pytest.fixture
def mock_llm() -> AsyncMock:
    """Mock model that approves every file."""
    llm = AsyncMock()
    llm.generate.return_value = "No issues found."
    return llm


class TrackingModel:
    """Fake model that records how many calls are in flight at once."""

    def __init__(self, delay: float = 0.01, fail_on: set[str] | None = None):
        self.delay = delay
        self.fail_on = fail_on or set()
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls = 0

    async def generate(self, prompt: str) -> str:
        self.calls += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            for marker in self.fail_on:
                if marker in prompt:
                    raise RuntimeError(f"model unavailable for {marker}")
            # Echo a marker line so sections can be matched to files
            first_line = prompt.split("File: ", 1)[-1].split("\n", 1)[0]
            return f"REVIEW-OF:{first_line}"
        finally:
            self.in_flight -= 1


@pytest.fixture
def tracking_model() -> TrackingModel:
    return TrackingModel()


@pytest.fixture
def tracking_model_factory() -> type[TrackingModel]:
    """TrackingModel class, for tests that need custom delay or failures."""
    return TrackingModel
