"""code-guard: LLM-backed code review for files and directory trees."""

__version__ = "0.1.0"
