"""
Review Invoker

Builds the review prompt for a unit and submits it to the chat model.
"""

import os
import re
from pathlib import Path

import structlog

from code_guard.errors import ModelInvocationError
from code_guard.llm import ChatModel

from .models import ReviewOutcome, ReviewUnit

logger = structlog.get_logger(__name__)

UNKNOWN_LANGUAGE = "Unknown"

PLACEHOLDER_PATTERN = re.compile(r"\{(language|file_path|content)\}")

LANGUAGE_MAP = {
    ".go": "Go",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".py": "Python",
    ".java": "Java",
    ".cpp": "C++",
    ".cc": "C++",
    ".cxx": "C++",
    ".c": "C",
    ".rs": "Rust",
    ".php": "PHP",
    ".rb": "Ruby",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".scala": "Scala",
    ".sh": "Shell",
    ".sql": "SQL",
    ".html": "HTML",
    ".htm": "HTML",
    ".css": "CSS",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".json": "JSON",
    ".xml": "XML",
    ".md": "Markdown",
}

DEFAULT_PROMPT_TEMPLATE = """\
You are an experienced {language} code reviewer.
Review the file below for bugs, security problems, performance issues,
readability and maintainability. For every finding give the location,
explain the problem and suggest a concrete fix. Answer in Markdown.

File: {file_path}

```
{content}
```
"""


def detect_language(path: str | Path) -> str:
    """Language label for a file, from its extension."""
    ext = os.path.splitext(str(path))[1].lower()
    return LANGUAGE_MAP.get(ext, UNKNOWN_LANGUAGE)


def load_prompt_template(prompt_file: str | Path | None) -> str:
    """Read a custom prompt template, or return the built-in one."""
    if not prompt_file:
        return DEFAULT_PROMPT_TEMPLATE
    return Path(prompt_file).read_text(encoding="utf-8")


class ReviewInvoker:
    """Submit review units to a chat model."""

    def __init__(self, model: ChatModel, prompt_template: str = DEFAULT_PROMPT_TEMPLATE):
        self.model = model
        self.prompt_template = prompt_template

    def build_prompt(self, unit: ReviewUnit, language: str) -> str:
        """Fill the template placeholders for one unit."""
        # Single pass: substituted values are never re-scanned
        values = {
            "language": language,
            "file_path": unit.relative_path,
            "content": unit.content,
        }
        return PLACEHOLDER_PATTERN.sub(lambda m: values[m.group(1)], self.prompt_template)

    async def review(self, unit: ReviewUnit) -> ReviewOutcome:
        """
        Review one unit.

        Raises:
            ModelInvocationError: If the model call fails for any reason
        """
        language = detect_language(unit.relative_path)
        prompt = self.build_prompt(unit, language)

        logger.debug("Reviewing file", file=unit.relative_path, language=language)
        try:
            result = await self.model.generate(prompt)
        except Exception as e:
            raise ModelInvocationError(unit.relative_path, e) from e

        return ReviewOutcome(unit=unit, result=result, detected_language=language)
