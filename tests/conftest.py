"""Shared pytest fixtures for baseline-pages tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
import structlog

from baseline_pages.config import PipelineConfig


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any configure_logging() a test triggered."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """A trimmed web-features index with nested groups and every label kind."""
    return {
        "grid": {
            "name": "Grid",
            "description": "CSS grid layout.",
            "spec": "https://drafts.csswg.org/css-grid-1/",
            "status": {
                "baseline": "high",
                "baseline_low_date": "2017-10-17",
                "baseline_high_date": "2020-04-17",
                "support": {"chrome": "57", "firefox": "52", "safari": "10.1"},
            },
        },
        "layout": {
            "container-queries": {
                "name": "Container queries",
                "description": "Style elements based on their container's size.",
                "status": {"baseline": "low", "baseline_low_date": "2023-02-14"},
            },
            "subgrid": {
                "name": "Subgrid",
                "status": {"baseline": "low"},
            },
        },
        "experimental": [
            {"name": "Anchor positioning", "status": {"baseline": False}},
            {"name": "Popover hints", "status": {"baseline": None}},
        ],
        "meta": {"version": "0.8.6", "count": 5},
    }


@pytest.fixture
def pipeline_config(tmp_path: Path) -> PipelineConfig:
    """Config writing into a temporary directory."""
    return PipelineConfig(
        source_url="https://example.test/web-features/index.json",
        output_dir=tmp_path / "out",
        data_dir=tmp_path / "data",
    )


@pytest.fixture
def make_client() -> Callable[..., httpx.Client]:
    """Build an httpx client answering every request from a MockTransport."""

    def _make(
        payload: Any = None,
        *,
        status_code: int = 200,
        content: bytes | None = None,
        exc: Exception | None = None,
    ) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            if exc is not None:
                raise exc
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make
