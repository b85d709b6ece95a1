"""
Tests for ReviewInvoker and language detection.
"""

from unittest.mock import AsyncMock

import pytest

from code_guard.errors import ModelInvocationError
from code_guard.review.invoker import (
    DEFAULT_PROMPT_TEMPLATE,
    ReviewInvoker,
    detect_language,
    load_prompt_template,
)
from code_guard.review.models import ReviewUnit


@pytest.mark.parametrize("path,label", [
    ("main.go", "Go"),
    ("app.jsx", "JavaScript"),
    ("types.TS", "TypeScript"),
    ("src/app.py", "Python"),
    ("engine.cxx", "C++"),
    ("kernel.c", "C"),
    ("lib.rs", "Rust"),
    ("deploy.sh", "Shell"),
    ("page.htm", "HTML"),
    ("ci.yml", "YAML"),
    ("notes.md", "Markdown"),
    ("styles.scss", "Unknown"),
    ("Makefile", "Unknown"),
])
def test_detect_language(path, label):
    assert detect_language(path) == label


class TestPrompt:
    """Prompt construction."""

    def test_default_template_has_placeholders(self):
        for placeholder in ("{language}", "{file_path}", "{content}"):
            assert placeholder in DEFAULT_PROMPT_TEMPLATE

    def test_build_prompt_keeps_braces_in_content(self):
        invoker = ReviewInvoker(AsyncMock())
        unit = ReviewUnit("pkg/main.go", "func main() { fmt.Println(\"{}\") }\n")

        prompt = invoker.build_prompt(unit, "Go")

        assert "File: pkg/main.go" in prompt
        assert "Go code reviewer" in prompt
        assert "func main() { fmt.Println(\"{}\") }" in prompt

    def test_custom_template_file(self, tmp_path):
        template = tmp_path / "prompt.txt"
        template.write_text("Check this {language} file {file_path}:\n{content}")

        invoker = ReviewInvoker(AsyncMock(), load_prompt_template(template))
        prompt = invoker.build_prompt(ReviewUnit("a.py", "x = 1"), "Python")

        assert prompt == "Check this Python file a.py:\nx = 1"

    def test_placeholders_in_values_are_not_expanded(self):
        invoker = ReviewInvoker(AsyncMock(), "[{file_path}] [{language}]\n{content}")
        unit = ReviewUnit("odd/{content}.py", "body mentions {language} and \\1")

        prompt = invoker.build_prompt(unit, "Python")

        assert prompt == "[odd/{content}.py] [Python]\nbody mentions {language} and \\1"

    def test_no_prompt_file_uses_default(self):
        assert load_prompt_template(None) == DEFAULT_PROMPT_TEMPLATE


class TestReview:
    """Model submission."""

    @pytest.mark.asyncio
    async def test_returns_outcome_with_language(self, mock_llm):
        invoker = ReviewInvoker(mock_llm)
        unit = ReviewUnit("notes.md", "# Notes\n")

        outcome = await invoker.review(unit)

        assert outcome.unit is unit
        assert outcome.result == "No issues found."
        assert outcome.detected_language == "Markdown"
        mock_llm.generate.assert_awaited_once()
        assert "# Notes" in mock_llm.generate.await_args.args[0]

    @pytest.mark.asyncio
    async def test_unknown_language_is_still_reviewed(self, mock_llm):
        outcome = await ReviewInvoker(mock_llm).review(ReviewUnit("site.less", "a {}"))

        assert outcome.detected_language == "Unknown"
        mock_llm.generate.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_model_failure_is_wrapped_without_retry(self):
        llm = AsyncMock()
        llm.generate.side_effect = TimeoutError("request timed out")

        with pytest.raises(ModelInvocationError) as exc_info:
            await ReviewInvoker(llm).review(ReviewUnit("a.py", "x = 1"))

        assert exc_info.value.file_path == "a.py"
        assert isinstance(exc_info.value.cause, TimeoutError)
        assert llm.generate.await_count == 1
