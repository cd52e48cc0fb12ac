"""
Configuration for baseline-pages.

Two layers:

- ``PipelineConfig``: the fixed build constants (where to fetch from, where
  to write, which labels get pages). Passed explicitly to the pipeline.
- ``BaselineSettings``: ambient process settings (log level and format) read
  from ``BASELINE_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).parent

SOURCE_URL = "https://www.unpkg.com/web-features@0.8.6/index.json"
UNKNOWN_LABEL = "unknown"
RENDERED_LABELS = ("high", "low")
STYLESHEET_NAME = "styles.css"


@dataclass
class PipelineConfig:
    """Build constants for one pipeline run.

    Attributes:
        source_url: URL of the web-features JSON dataset
        output_dir: Where HTML pages and the stylesheet are written
        data_dir: Where per-label JSON partitions are written
        stylesheet_path: Stylesheet copied into ``output_dir``
        template_dir: Directory containing the Jinja2 page templates
        rendered_labels: Labels that get an HTML page, in index order
        fetch_timeout: Seconds before the dataset fetch gives up (None waits forever)
        max_depth: Nesting depth the classifier refuses to go beyond
    """

    source_url: str = SOURCE_URL
    output_dir: Path = field(default_factory=lambda: Path.cwd() / "out")
    data_dir: Path = field(default_factory=lambda: Path.cwd() / "data")
    stylesheet_path: Path = field(default_factory=lambda: PACKAGE_DIR / "static" / STYLESHEET_NAME)
    template_dir: Path = field(default_factory=lambda: PACKAGE_DIR / "templates")
    rendered_labels: tuple[str, ...] = RENDERED_LABELS
    fetch_timeout: float | None = None
    max_depth: int = 512

    def __post_init__(self):
        """Convert paths to Path objects if strings."""
        for name in ("output_dir", "data_dir", "stylesheet_path", "template_dir"):
            value = getattr(self, name)
            if isinstance(value, str):
                setattr(self, name, Path(value))
        self.rendered_labels = tuple(self.rendered_labels)

    @property
    def stylesheet_dest(self) -> Path:
        return self.output_dir / STYLESHEET_NAME

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PipelineConfig:
        """Create config from dictionary."""
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "source_url": self.source_url,
            "output_dir": str(self.output_dir),
            "data_dir": str(self.data_dir),
            "stylesheet_path": str(self.stylesheet_path),
            "template_dir": str(self.template_dir),
            "rendered_labels": list(self.rendered_labels),
            "fetch_timeout": self.fetch_timeout,
            "max_depth": self.max_depth,
        }


class BaselineSettings(BaseSettings):
    """Process-level settings read from the environment.

    Fields
    ──────
    log_level : structlog level name
    json_logs : force JSON (True) or console (False) logs; None auto-detects
    """

    model_config = SettingsConfigDict(
        env_prefix="BASELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="structlog level name")
    json_logs: bool | None = Field(
        default=None,
        description="Force JSON (True) or console (False) logs; None auto-detects",
    )
