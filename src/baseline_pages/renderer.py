"""
HTML page renderer.

Turns classifier buckets into static pages with Jinja2 templates.

Architecture:
    ::

        BucketMap ──► PageRenderer.render_pages()
                          │
                          ├──► for label in rendered_labels (fixed subset):
                          │         bucket non-empty?
                          │           └──► feature_template.html ──► <label>.html
                          │
                          └──► index_template.html ──► index.html
                                 (only labels that produced a page)

Only the configured subset of labels ever gets a page. Everything else the
classifier finds (``unknown`` included) is persisted as data but not shown.

Guardrails:
    - Autoescape is on for ``.html`` templates; feature text comes from an
      upstream dataset and is never marked safe
    - Missing or broken templates raise RenderError, not a Jinja2 exception
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from baseline_pages.classifier import BucketMap
from baseline_pages.config import RENDERED_LABELS
from baseline_pages.errors import RenderError, StorageError
from baseline_pages.logging import get_logger
from baseline_pages.writer import ensure_directory

logger = get_logger(__name__)

FEATURE_TEMPLATE = "feature_template.html"
INDEX_TEMPLATE = "index_template.html"
INDEX_PAGE = "index.html"

LABEL_TITLES = {
    "high": "Widely Available Features",
    "low": "Newly Available Features",
}


def page_title(label: str) -> str:
    """Human-readable title for a label's page."""
    if label in LABEL_TITLES:
        return LABEL_TITLES[label]
    return f"{label.replace('_', ' ').title()} Features"


def labels_with_data(buckets: BucketMap, labels: Iterable[str]) -> list[str]:
    """Labels from ``labels`` whose bucket exists and is non-empty, in order."""
    return [label for label in labels if buckets.get(label)]


class PageRenderer:
    """Render feature pages and the index page.

    Example:
        >>> renderer = PageRenderer(Path("src/baseline_pages/templates"))
        >>> renderer.render_pages(buckets, Path("out"))
        [PosixPath('out/high.html'), PosixPath('out/low.html'), PosixPath('out/index.html')]
    """

    def __init__(
        self,
        template_dir: Path | None = None,
        rendered_labels: Sequence[str] = RENDERED_LABELS,
    ):
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"
        self.template_dir = Path(template_dir)
        self.rendered_labels = tuple(rendered_labels)

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["baseline_title"] = page_title

    def _render(self, template_name: str, **context: Any) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise RenderError(f"Could not render {template_name}: {e}", cause=e).with_context(
                path=str(self.template_dir / template_name)
            )

    def render_feature_page(self, label: str, features: list[dict[str, Any]]) -> str:
        """Render the page listing one label's features."""
        title = page_title(label)
        return self._render(
            FEATURE_TEMPLATE,
            features=features,
            title=title,
            heading=title,
            label=label,
        )

    def render_index(self, statuses: list[str]) -> str:
        """Render the index page linking to each label page in ``statuses``."""
        return self._render(INDEX_TEMPLATE, statuses=statuses)

    def _write(self, path: Path, content: str, event: str, **fields: Any) -> Path:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write page {path}", cause=e).with_context(
                path=str(path)
            )
        logger.info(event, path=str(path), **fields)
        return path

    def render_pages(self, buckets: BucketMap, output_dir: Path) -> list[Path]:
        """Write label pages for the fixed subset, then ``index.html``.

        Args:
            buckets: Classifier output
            output_dir: Destination directory (created if absent)

        Returns:
            Written page paths; the index page is always last
        """
        output_dir = Path(output_dir)
        ensure_directory(output_dir)

        statuses = labels_with_data(buckets, self.rendered_labels)
        written = []

        for label in statuses:
            features = buckets[label]
            content = self.render_feature_page(label, features)
            path = output_dir / f"{label}.html"
            written.append(
                self._write(path, content, "page_written", label=label, features=len(features))
            )

        index_path = output_dir / INDEX_PAGE
        written.append(
            self._write(index_path, self.render_index(statuses), "index_written", statuses=statuses)
        )

        return written
