"""
Data models for the review pipeline.

Defines the units of work passed between collector, invoker and report sink,
and the immutable options for a single review run.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_MAX_CONCURRENCY = 10


@dataclass(frozen=True)
class ReviewUnit:
    """A single file queued for review."""

    relative_path: str
    content: str


@dataclass(frozen=True)
class ReviewOutcome:
    """Raw model reply for one unit."""

    unit: ReviewUnit
    result: Any  # str or a structured chat message
    detected_language: str


@dataclass
class DispatchSummary:
    """Tally of a dispatcher run."""

    total: int = 0
    succeeded: int = 0
    failed: list[tuple[str, BaseException]] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        """Number of units whose task raised."""
        return len(self.failed)


@dataclass
class ReviewRunResult:
    """Result of one orchestrated review run."""

    report_path: Path
    units_collected: int = 0
    summary: DispatchSummary = field(default_factory=DispatchSummary)


class ReviewOptions(BaseModel):
    """Options for one review run, fixed for its lifetime."""

    model_config = ConfigDict(frozen=True)

    review_root: Path
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    output_file: str | None = None
    report_language: Literal["en", "zh"] = "zh"
    prompt_file: Path | None = None

    @field_validator("max_concurrency")
    @classmethod
    def _floor_concurrency(cls, value: int) -> int:
        return value if value > 0 else DEFAULT_MAX_CONCURRENCY
