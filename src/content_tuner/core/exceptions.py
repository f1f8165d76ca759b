"""
Custom exceptions for content-tuner.

Provides a hierarchy of exceptions for precise error handling across
extraction, evaluation and tuning. All exceptions inherit from
ContentTunerError.

Exception Hierarchy:
    ContentTunerError (base)
    ├── ConfigurationError
    ├── ExtractionError
    ├── EvaluationError
    │   └── EmptyCorpusError
    └── CorpusError
        └── MissingFixtureError
"""

from pathlib import Path
from typing import Any


class ContentTunerError(Exception):
    """
    Base exception for all content-tuner errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary with additional context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(
                f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ContentTunerError):
    """
    Error in configuration loading or validation.

    Raised when:
    - A coefficient vector has the wrong length
    - A coefficient is not a real number
    - Configuration file is malformed
    """

    pass


# =============================================================================
# Extraction Errors
# =============================================================================


class ExtractionError(ContentTunerError):
    """
    Error while running the content extraction pipeline.

    An empty extraction result is not an error; this is reserved for
    documents the pipeline cannot work with at all.
    """

    pass


# =============================================================================
# Evaluation Errors
# =============================================================================


class EvaluationError(ContentTunerError):
    """Base error for the quality metric."""

    pass


class EmptyCorpusError(EvaluationError):
    """
    Score requested with nothing to divide by.

    Raised when score() is called before any comparison, or when every
    compared expected text was empty.
    """

    def __init__(
        self,
        message: str,
        comparisons: int = 0,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["comparisons"] = comparisons
        super().__init__(message, details)
        self.comparisons = comparisons


# =============================================================================
# Corpus Errors
# =============================================================================


class CorpusError(ContentTunerError):
    """Base error for loading test corpora."""

    pass


class MissingFixtureError(CorpusError):
    """
    A corpus case directory lacks one of its required files.

    Every case needs both expected.html and source.html.
    """

    def __init__(
        self,
        message: str,
        folder: Path | str,
        file_name: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["folder"] = str(folder)
        details["file"] = file_name
        super().__init__(message, details)
        self.folder = Path(folder)
        self.file_name = file_name
