# src/frontcheck/errors.py
from typing import Optional


class FrontcheckError(Exception):
    """Base class for every error raised by the checker."""


class ProjectLoadError(FrontcheckError, OSError):
    """The working directory (or a file inside it) could not be read."""


class ParseError(FrontcheckError):
    """Malformed markup or stylesheet source."""

    def __init__(self, message: str, file_path: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.file_path = file_path
        self.line = line


class RuleExecutionError(FrontcheckError):
    """An unexpected exception escaped from a rule."""

    def __init__(self, rule_name: str, cause: BaseException):
        super().__init__(f"{rule_name} failed: {cause}")
        self.rule_name = rule_name
        self.cause = cause


class ExternalValidatorError(FrontcheckError):
    """The external markup conformance service could not be used."""
