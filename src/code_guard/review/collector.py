"""
Review Collector

Walks a review root and builds the ordered list of review units.
"""

import os
from pathlib import Path

import structlog

from code_guard.errors import CollectError

from .file_filter import ReviewFilter
from .models import ReviewUnit

logger = structlog.get_logger(__name__)


def read_source(path: str | Path) -> str:
    """Read a file as text, replacing undecodable bytes."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def relative_path(path: str | Path, root: str | Path) -> str:
    """Path relative to root, or the absolute path if that fails."""
    try:
        return os.path.relpath(path, root)
    except ValueError:
        return os.path.abspath(path)


def _raise_walk_error(err: OSError) -> None:
    raise err


class ReviewCollector:
    """Collect review units from a file or directory tree."""

    def __init__(self, review_filter: ReviewFilter):
        self.filter = review_filter

    def collect(self, root: str | Path) -> list[ReviewUnit]:
        """
        Collect review units under root.

        Args:
            root: File or directory to review

        Returns:
            Units in traversal order; empty if nothing qualifies

        Raises:
            CollectError: If root is missing or the walk fails
        """
        root_path = Path(root)
        if not root_path.exists():
            raise CollectError(f"review path does not exist: {root}")

        if root_path.is_dir():
            return self._collect_directory(root_path)
        return self._collect_file(root_path)

    def _collect_file(self, path: Path) -> list[ReviewUnit]:
        if self.filter.should_skip(path):
            logger.warning("Skipping file", path=str(path))
            return []

        if not self.filter.is_reviewable(path):
            logger.warning("Skipping non-code file", path=str(path))
            return []

        try:
            content = read_source(path)
        except OSError as e:
            raise CollectError(f"failed to read file {path}: {e}") from e

        return [ReviewUnit(relative_path=path.name, content=content)]

    def _collect_directory(self, root: Path) -> list[ReviewUnit]:
        units: list[ReviewUnit] = []

        try:
            for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
                # Lexical order keeps repeated runs identical
                dirnames.sort()

                for name in sorted(filenames):
                    path = os.path.join(dirpath, name)

                    if not self.filter.accepts(path):
                        continue

                    if not os.path.isfile(path):
                        logger.debug("Ignoring non-regular file", path=path)
                        continue

                    try:
                        content = read_source(path)
                    except OSError as e:
                        logger.error("Failed to read file", path=path, error=str(e))
                        continue

                    units.append(
                        ReviewUnit(relative_path=relative_path(path, root), content=content)
                    )
        except OSError as e:
            raise CollectError(f"failed to walk directory {root}: {e}") from e

        logger.debug("Collected review units", root=str(root), count=len(units))
        return units
