"""
Review Engine

Orchestrates one review run: collect files, review them concurrently,
append each result to the report.
"""

import asyncio
import time
from pathlib import Path

import structlog
from openai import OpenAIError

from code_guard.config import Settings, normalize_language
from code_guard.errors import CollectError, ConfigError
from code_guard.llm import ChatModel, OpenAIChatModel

from .collector import ReviewCollector
from .dispatcher import run_all
from .file_filter import ReviewFilter
from .invoker import ReviewInvoker, load_prompt_template
from .models import ReviewOptions, ReviewRunResult, ReviewUnit
from .report import ReportSink

logger = structlog.get_logger(__name__)


class ReviewEngine:
    """
    Review orchestrator.

    Pipeline:
    1. Collect: walk the review root through the file filter
    2. Dispatch: review units in parallel under a concurrency cap
    3. Report: append every successful review to one Markdown file

    Sections are written as reviews finish, so report order is completion
    order. In-flight model calls are not cancelled or timed out.
    """

    def __init__(self, options: ReviewOptions, model: ChatModel):
        """
        Initialize the engine.

        Args:
            options: Options for this run
            model: Chat model used for every file
        """
        self.options = options
        self.filter = ReviewFilter(options.review_root, options.output_file)
        self.collector = ReviewCollector(self.filter)
        try:
            template = load_prompt_template(options.prompt_file)
        except OSError as e:
            raise ConfigError(f"failed to read prompt file: {e}") from e
        self.invoker = ReviewInvoker(model, template)
        self.sink = ReportSink(
            options.review_root,
            options.output_file,
            options.report_language,
        )

    @property
    def report_path(self) -> Path:
        """Where the report is written."""
        return self.sink.path

    async def run(self) -> ReviewRunResult:
        """
        Run the review.

        Returns:
            ReviewRunResult with the report path and dispatch summary

        Raises:
            CollectError: If the review root is missing or cannot be walked
        """
        start_time = time.time()
        root = self.options.review_root

        if not root.exists():
            raise CollectError(f"failed to get path info: {root}")

        units = await asyncio.to_thread(self.collector.collect, root)
        result = ReviewRunResult(report_path=self.report_path, units_collected=len(units))

        if not units:
            logger.info("No files to review", root=str(root))
            return result

        logger.info(
            "Starting review",
            root=str(root),
            files=len(units),
            max_concurrency=self.options.max_concurrency,
        )

        result.summary = await run_all(units, self.options.max_concurrency, self._review_unit)

        logger.info(
            "Review finished",
            reviewed=result.summary.succeeded,
            failed=result.summary.failed_count,
            report=str(self.report_path),
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return result

    async def _review_unit(self, unit: ReviewUnit) -> Path:
        outcome = await self.invoker.review(unit)
        return await asyncio.to_thread(
            self.sink.append,
            outcome.unit.relative_path,
            outcome.result,
            outcome.detected_language,
        )


def create_review_engine(
    settings: Settings,
    review_root: str | Path = ".",
    max_concurrency: int = 10,
    output_file: str | None = None,
    report_language: str | None = None,
    prompt_file: str | Path | None = None,
    model: ChatModel | None = None,
) -> ReviewEngine:
    """
    Create a fully-wired review engine.

    Builds an OpenAIChatModel from settings unless a model is given.
    report_language falls back to the configured language.
    """
    if model is None:
        if not settings.model:
            raise ConfigError("no model configured")
        try:
            model = OpenAIChatModel(
                base_url=settings.api_server,
                api_key=settings.api_key,
                model=settings.model,
            )
        except OpenAIError as e:
            raise ConfigError(f"create model failed: {e}") from e

    options = ReviewOptions(
        review_root=Path(review_root),
        max_concurrency=max_concurrency,
        output_file=output_file or None,
        report_language=normalize_language(report_language or settings.language),
        prompt_file=Path(prompt_file) if prompt_file else None,
    )
    return ReviewEngine(options, model)
