"""
Feature classifier.

Walks a parsed web-features document depth-first and groups every feature
record by its ``status.baseline`` label.

Architecture:
    ::

        document ──► _walk(node, depth)
                        │
                        ├── scalar ──────────────► ignored
                        ├── feature record ──────► buckets[label].append(node)
                        │                          (not descended into)
                        ├── dict ──► _walk(value) for each value
                        └── list ──► _walk(item)  for each item

A feature record is a mapping whose ``status`` is itself a mapping holding a
``baseline`` key. The key only has to be present: ``false``, ``null`` and
empty values are bucketed under ``"unknown"`` rather than skipped.

Examples:
    >>> classify({"grid": {"status": {"baseline": "high"}}})
    {'high': [{'status': {'baseline': 'high'}}]}
    >>> classify({"a": {"status": {"baseline": False}}, "b": {"x": 1}})
    {'unknown': [{'status': {'baseline': False}}]}
    >>> classify("not a document")
    {}
"""

from __future__ import annotations

from typing import Any

from baseline_pages.config import UNKNOWN_LABEL
from baseline_pages.errors import DocumentTooDeepError

BucketMap = dict[str, list[dict[str, Any]]]

DEFAULT_MAX_DEPTH = 512


def is_feature_record(node: Any) -> bool:
    """True if ``node`` carries a ``status.baseline`` field (any value)."""
    if not isinstance(node, dict):
        return False
    status = node.get("status")
    return isinstance(status, dict) and "baseline" in status


def baseline_label(record: dict[str, Any]) -> str:
    """Bucket label for a feature record."""
    value = record["status"]["baseline"]
    if not value:
        return UNKNOWN_LABEL
    if isinstance(value, str):
        return value
    if value is True:
        return "true"
    return str(value)


def classify(document: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> BucketMap:
    """Group every feature record in ``document`` by baseline label.

    Args:
        document: Parsed JSON value (usually the dataset root mapping)
        max_depth: Nesting depth beyond which the walk is abandoned

    Returns:
        Mapping of label to records, both in first-discovered order

    Raises:
        DocumentTooDeepError: If nesting exceeds ``max_depth``
    """
    buckets: BucketMap = {}

    def _walk(node: Any, depth: int) -> None:
        if not isinstance(node, (dict, list)):
            return
        if depth > max_depth:
            raise DocumentTooDeepError(max_depth)

        if is_feature_record(node):
            buckets.setdefault(baseline_label(node), []).append(node)
            return

        children = node.values() if isinstance(node, dict) else node
        for child in children:
            _walk(child, depth + 1)

    _walk(document, 0)
    return buckets


def bucket_counts(buckets: BucketMap) -> dict[str, int]:
    """Number of records per label, in bucket order."""
    return {label: len(records) for label, records in buckets.items()}
