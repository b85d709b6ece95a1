"""Exception types raised by code-guard."""


class CodeGuardError(Exception):
    """Base class for all code-guard errors."""


class ConfigError(CodeGuardError):
    """Configuration file missing or unreadable. Fatal."""


class CollectError(CodeGuardError):
    """Review root missing or the directory walk failed. Fatal."""


class ModelInvocationError(CodeGuardError):
    """The chat model call failed for one file."""

    def __init__(self, file_path: str, cause: BaseException):
        super().__init__(f"model call failed for {file_path}: {cause}")
        self.file_path = file_path
        self.cause = cause


class ReportWriteError(CodeGuardError):
    """Appending a section to the report failed."""
