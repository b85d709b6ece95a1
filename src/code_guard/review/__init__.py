"""
Review Module

Concurrent file review: collect, dispatch to the model, append to one report.
"""

from .collector import ReviewCollector
from .dispatcher import run_all
from .engine import ReviewEngine, create_review_engine
from .file_filter import ReviewFilter, report_file_name
from .invoker import ReviewInvoker, detect_language
from .models import (
    DispatchSummary,
    ReviewOptions,
    ReviewOutcome,
    ReviewRunResult,
    ReviewUnit,
)
from .report import ReportSink, format_section

__all__ = [
    "ReviewEngine",
    "create_review_engine",
    "ReviewCollector",
    "ReviewFilter",
    "report_file_name",
    "ReviewInvoker",
    "detect_language",
    "ReportSink",
    "format_section",
    "run_all",
    "DispatchSummary",
    "ReviewOptions",
    "ReviewOutcome",
    "ReviewRunResult",
    "ReviewUnit",
]
