"""Tests for baseline_pages.errors."""

from baseline_pages.errors import (
    BaselineError,
    DocumentTooDeepError,
    ErrorCategory,
    ErrorContext,
    NetworkError,
    ParseError,
    RenderError,
    SourceError,
    StorageError,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_to_dict_excludes_none(self):
        ctx = ErrorContext(stage="fetch", url=None)

        assert ctx.to_dict() == {"stage": "fetch"}

    def test_metadata_is_merged(self):
        ctx = ErrorContext(label="high", metadata={"records": 3})

        assert ctx.to_dict() == {"label": "high", "records": 3}


class TestBaselineError:
    """Test the base error."""

    def test_default_category(self):
        assert BaselineError("x").category == ErrorCategory.INTERNAL

    def test_subclass_categories(self):
        assert NetworkError("x").category == ErrorCategory.NETWORK
        assert SourceError("x").category == ErrorCategory.SOURCE
        assert ParseError("x").category == ErrorCategory.PARSE
        assert StorageError("x").category == ErrorCategory.STORAGE
        assert RenderError("x").category == ErrorCategory.RENDER

    def test_parse_error_is_source_error(self):
        assert isinstance(DocumentTooDeepError(3), SourceError)

    def test_with_context_known_and_extra_keys(self):
        error = StorageError("write failed").with_context(path="/tmp/x", destination="/tmp/y")

        assert error.context.path == "/tmp/x"
        assert error.context.metadata == {"destination": "/tmp/y"}

    def test_cause_is_chained(self):
        cause = OSError("disk full")

        error = StorageError("write failed", cause=cause)

        assert error.__cause__ is cause

    def test_to_dict(self):
        error = SourceError("bad status").with_context(http_status=500)

        assert error.to_dict() == {
            "error_type": "SourceError",
            "message": "bad status",
            "category": "SOURCE",
            "context": {"http_status": 500},
        }

    def test_repr(self):
        assert repr(RenderError("nope")) == "RenderError('nope', category=RENDER)"
