"""
Report Sink

Appends one Markdown section per reviewed file to the report artifact.
Many review tasks write concurrently; every append is serialized and
flushed on its own, so an interrupted run keeps all finished sections.
"""

import threading
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog
from openai.types.chat import ChatCompletionMessage

from code_guard.errors import ReportWriteError

from .file_filter import report_file_name

logger = structlog.get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

EN_TEMPLATE = """
## Code Review Report

**File Path**: {file_path}  
**File Type**: {language}  
**Review Time**: {timestamp}

### Review Result

{content}

---

"""

ZH_TEMPLATE = """
## 文件审查报告

**文件路径**: {file_path}  
**文件类型**: {language}  
**审查时间**: {timestamp}

### 审查结果

{content}

---

"""


def extract_text(result: Any) -> str:
    """Text payload of a model reply."""
    if isinstance(result, ChatCompletionMessage):
        return result.content or ""
    if isinstance(result, str):
        return result
    return str(result)


def format_section(
    file_path: str,
    result: Any,
    language: str,
    report_language: str = "zh",
    now: datetime | None = None,
) -> str:
    """Render one report section."""
    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    template = EN_TEMPLATE if report_language == "en" else ZH_TEMPLATE
    return template.format(
        file_path=file_path,
        language=language,
        timestamp=timestamp,
        content=extract_text(result),
    )


class ReportSink:
    """Serialized append-only writer for the review report."""

    def __init__(
        self,
        review_root: str | Path,
        output_file: str | None = None,
        report_language: str = "zh",
    ):
        """
        Initialize the sink.

        The report always lands in the current working directory, never
        inside the reviewed tree.
        """
        self.path = Path.cwd() / report_file_name(review_root, output_file)
        self.report_language = report_language
        self._lock = threading.Lock()

    def append(self, file_path: str, result: Any, language: str) -> Path:
        """
        Append one section for a reviewed file.

        Returns:
            Path of the report file

        Raises:
            ReportWriteError: If the report cannot be opened or written
        """
        section = format_section(file_path, result, language, self.report_language)

        with self._lock:
            try:
                with open(self.path, "a", encoding="utf-8") as f:
                    f.write(section)
                    f.flush()
            except OSError as e:
                raise ReportWriteError(f"failed to write report {self.path}: {e}") from e

        logger.info("Review report saved", file=file_path, path=str(self.path))
        return self.path
