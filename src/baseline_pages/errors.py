"""
Structured error types for baseline-pages.

Every failure the build can hit is raised as a ``BaselineError`` subclass so
the single top-level handler in the pipeline can log it with its category and
context instead of a bare traceback.

Architecture:
    ::

        ┌───────────────────────────────────────────────────────┐
        │                    BaselineError                       │
        │            (category, context, cause)                  │
        ├───────────────────────────────────────────────────────┤
        │  NetworkError    SourceError      StorageError        │
        │  (NETWORK)       (SOURCE)         (STORAGE)           │
        │                      │                                 │
        │                  ParseError       RenderError         │
        │                  (PARSE)          (RENDER)            │
        │                      │                                 │
        │              DocumentTooDeepError                      │
        └───────────────────────────────────────────────────────┘

Examples:
    >>> error = SourceError("Dataset request failed").with_context(
    ...     url="https://www.unpkg.com/web-features@0.8.6/index.json",
    ...     http_status=503,
    ... )
    >>> error.to_dict()["context"]["http_status"]
    503

Guardrails:
    ❌ DON'T: Raise plain Exception from a pipeline stage
    ✅ DO: Wrap the underlying exception with cause=

Tags:
    error-handling, exception-hierarchy, error-context, baseline-pages
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for log routing."""

    NETWORK = "NETWORK"    # Connection, DNS, transport
    SOURCE = "SOURCE"      # Upstream returned a non-success status
    PARSE = "PARSE"        # Undecodable or pathological payload
    STORAGE = "STORAGE"    # Directory creation, write, copy
    RENDER = "RENDER"      # Template lookup or rendering
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        stage: Pipeline stage where the error occurred
        run_id: Build run identifier
        url: URL that was being fetched
        http_status: HTTP status code if applicable
        path: Filesystem path that was being written or read
        label: Baseline label being processed
        metadata: Additional key-value pairs
    """

    stage: str | None = None
    run_id: str | None = None
    url: str | None = None
    http_status: int | None = None
    path: str | None = None
    label: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["stage", "run_id", "url", "http_status", "path", "label"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class BaselineError(Exception):
    """
    Base exception for all baseline-pages errors.

    Subclasses set ``default_category``. The original exception, when there is
    one, is kept as ``cause`` and chained through ``__cause__`` so tracebacks
    still show the root failure.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> BaselineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise StorageError("Write failed").with_context(path=str(path))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class NetworkError(BaselineError):
    """Transport-level failure reaching the dataset host."""

    default_category = ErrorCategory.NETWORK


class SourceError(BaselineError):
    """The dataset host answered with a non-success status."""

    default_category = ErrorCategory.SOURCE


class ParseError(SourceError):
    """The dataset payload could not be decoded or walked."""

    default_category = ErrorCategory.PARSE


class DocumentTooDeepError(ParseError):
    """The document nests deeper than the classifier's depth guard."""

    def __init__(self, max_depth: int):
        super().__init__(f"Document nesting exceeds maximum depth of {max_depth}")
        self.max_depth = max_depth
        self.context.metadata["max_depth"] = max_depth


class StorageError(BaselineError):
    """Directory creation, file write or asset copy failed."""

    default_category = ErrorCategory.STORAGE


class RenderError(BaselineError):
    """A page template could not be loaded or rendered."""

    default_category = ErrorCategory.RENDER


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "BaselineError",
    "NetworkError",
    "SourceError",
    "ParseError",
    "DocumentTooDeepError",
    "StorageError",
    "RenderError",
]
