"""
Build pipeline.

Runs the whole build as one strictly ordered sequence of stages and reports
the outcome.

Architecture:
    ::

        BaselinePipeline.run()
              │
              ├──► fetch        FeatureSource.fetch()        (status + JSON)
              ├──► classify     classify(document)           → BucketMap
              ├──► persist      write_partitions(...)        → data/<label>.json
              ├──► render       PageRenderer.render_pages()  → out/<label>.html, index.html
              └──► assets       copy stylesheet              → out/styles.css

    Any failure is caught once, at the top of ``run()``, logged, and stored
    on the result. Nothing is retried and nothing already written is removed.

Examples:
    >>> pipeline = BaselinePipeline(PipelineConfig(output_dir=Path("out")))
    >>> result = pipeline.run()
    >>> result.success
    True
    >>> result.counts
    {'high': 412, 'low': 57, 'unknown': 98}
"""

from __future__ import annotations

import shutil
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from baseline_pages.classifier import BucketMap, bucket_counts, classify
from baseline_pages.config import PipelineConfig
from baseline_pages.errors import BaselineError, StorageError
from baseline_pages.logging import LogContext, get_logger
from baseline_pages.renderer import PageRenderer
from baseline_pages.source import FeatureSource
from baseline_pages.writer import ensure_directory, write_partitions

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one build run."""

    run_id: str
    counts: dict[str, int] = field(default_factory=dict)
    data_files: list[Path] = field(default_factory=list)
    pages: list[Path] = field(default_factory=list)
    stylesheet: Path | None = None
    error: BaselineError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "success": self.success,
            "counts": self.counts,
            "data_files": [str(p) for p in self.data_files],
            "pages": [str(p) for p in self.pages],
            "stylesheet": str(self.stylesheet) if self.stylesheet else None,
            "error": self.error.to_dict() if self.error else None,
        }


class BaselinePipeline:
    """Fetch, classify, persist and render the baseline feature pages."""

    def __init__(
        self,
        config: PipelineConfig | None = None,
        source: FeatureSource | None = None,
        renderer: PageRenderer | None = None,
    ):
        self.config = config or PipelineConfig()
        self.source = source or FeatureSource(
            self.config.source_url,
            timeout=self.config.fetch_timeout,
        )
        self.renderer = renderer or PageRenderer(
            self.config.template_dir,
            rendered_labels=self.config.rendered_labels,
        )

    def classify(self, document: Any) -> BucketMap:
        buckets = classify(document, max_depth=self.config.max_depth)
        logger.info("classified", counts=bucket_counts(buckets))
        return buckets

    def persist(self, buckets: BucketMap) -> list[Path]:
        return write_partitions(buckets, self.config.data_dir)

    def render(self, buckets: BucketMap) -> list[Path]:
        return self.renderer.render_pages(buckets, self.config.output_dir)

    def copy_assets(self) -> Path:
        """Copy the stylesheet into the output directory."""
        src = self.config.stylesheet_path
        dest = self.config.stylesheet_dest
        ensure_directory(dest.parent)
        try:
            shutil.copyfile(src, dest)
        except OSError as e:
            raise StorageError(f"Could not copy stylesheet {src}", cause=e).with_context(
                path=str(src), destination=str(dest)
            )
        logger.info("stylesheet_copied", path=str(dest))
        return dest

    def _run_stages(self, result: PipelineResult) -> None:
        stage = "fetch"
        try:
            document = self.source.fetch()

            stage = "classify"
            buckets = self.classify(document)
            result.counts = bucket_counts(buckets)

            stage = "persist"
            result.data_files = self.persist(buckets)

            stage = "render"
            result.pages = self.render(buckets)

            stage = "assets"
            result.stylesheet = self.copy_assets()
        except BaselineError as e:
            if e.context.stage is None:
                e.with_context(stage=stage)
            raise

    def run(self) -> PipelineResult:
        """Run every stage in order, catching and logging any failure.

        Returns:
            PipelineResult; ``error`` is set if a stage failed
        """
        result = PipelineResult(run_id=uuid.uuid4().hex[:12])

        with LogContext(run_id=result.run_id):
            logger.info("build_started", source_url=self.config.source_url)
            try:
                self._run_stages(result)
            except BaselineError as e:
                e.with_context(run_id=result.run_id)
                result.error = e
                logger.error("build_failed", **e.to_dict())
            except Exception as e:
                error = BaselineError(f"Unexpected error: {e}", cause=e).with_context(
                    run_id=result.run_id
                )
                result.error = error
                logger.exception("build_failed", **error.to_dict())
            else:
                logger.info(
                    "build_completed",
                    data_files=len(result.data_files),
                    pages=len(result.pages),
                )

        return result
