"""
File Filter

Decides which files are handed to the model for review.
Filtering is by extension and file name only; content is never inspected.
"""

import os
from pathlib import Path

DEFAULT_REPORT_NAME = "code-review.md"
REPORT_SUFFIX = "-code-review.md"

# Base names that cannot name a report
_ROOT_TOKENS = frozenset({"", ".", "/", "\\"})

VCS_DIR = ".git"


def report_file_name(review_root: str | Path, explicit: str | None = None) -> str:
    """
    Name of the report artifact for a review root.

    An explicit name always wins. Otherwise the root's base name is used,
    e.g. ``src/app`` -> ``app-code-review.md``; roots without a usable base
    name (``.``, ``/``) fall back to ``code-review.md``.
    """
    if explicit:
        return explicit

    raw = str(review_root)
    trimmed = raw.rstrip("/" + os.sep)
    if not trimmed:
        base = os.sep if raw else "."
    else:
        base = os.path.basename(trimmed)

    if base in _ROOT_TOKENS:
        return DEFAULT_REPORT_NAME

    base = base.replace(os.sep, "_")
    return f"{base}{REPORT_SUFFIX}"


class ReviewFilter:
    """Allow-list and skip rules for review candidates."""

    # Closed allow-list: anything else is not reviewed
    CODE_EXTENSIONS = frozenset({
        ".go",
        ".js",
        ".jsx",
        ".ts",
        ".tsx",
        ".py",
        ".java",
        ".cpp",
        ".cc",
        ".cxx",
        ".c",
        ".rs",
        ".php",
        ".rb",
        ".swift",
        ".kt",
        ".scala",
        ".sh",
        ".sql",
        ".html",
        ".htm",
        ".css",
        ".scss",
        ".sass",
        ".less",
        ".yaml",
        ".yml",
        ".json",
        ".xml",
        ".md",
    })

    # Build output, lock files and binaries
    SKIP_EXTENSIONS = frozenset({
        ".sum",
        ".mod",
        ".lock",
        ".log",
        ".tmp",
        ".temp",
        ".sample",
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".bin",
        ".out",
    })

    # Docs, licenses, ignore and env files
    SKIP_FILENAMES = frozenset({
        "README.md",
        "README",
        "readme.md",
        "readme",
        "LICENSE",
        "license",
        "LICENSE.md",
        "license.md",
        ".gitignore",
        ".env",
        ".env.local",
        ".env.sample",
        ".DS_Store",
        "Thumbs.db",
    })

    def __init__(self, review_root: str | Path, output_file: str | None = None):
        """Initialize filter for a review root and optional explicit report name."""
        self.report_name = report_file_name(review_root, output_file)

    @staticmethod
    def _extension(path: str | Path) -> str:
        return os.path.splitext(str(path))[1].lower()

    @classmethod
    def is_reviewable(cls, path: str | Path) -> bool:
        """True if the file extension is in the allow-list."""
        return cls._extension(path) in cls.CODE_EXTENSIONS

    @staticmethod
    def in_vcs_metadata(path: str | Path) -> bool:
        """True for paths under ``.git/`` or named ``.git*``."""
        text = str(path)
        if VCS_DIR + os.sep in text or VCS_DIR + "/" in text:
            return True
        return os.path.basename(text).startswith(VCS_DIR)

    def should_skip(self, path: str | Path) -> bool:
        """True if any skip rule matches."""
        if self.in_vcs_metadata(path):
            return True

        filename = os.path.basename(str(path))

        # The report itself grows inside the tree when run from the root
        if filename == self.report_name:
            return True

        if self._extension(path) in self.SKIP_EXTENSIONS:
            return True

        return filename in self.SKIP_FILENAMES

    def accepts(self, path: str | Path) -> bool:
        """True if the file should be reviewed."""
        return not self.should_skip(path) and self.is_reviewable(path)
