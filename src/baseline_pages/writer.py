"""
Partition writer.

Persists each bucket of the classifier's output as ``<label>.json`` in the
data directory. The set of files follows the labels actually found in the
dataset, so a new upstream label produces a new file without code changes.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from baseline_pages.classifier import BucketMap
from baseline_pages.errors import StorageError
from baseline_pages.logging import get_logger

logger = get_logger(__name__)

JSON_INDENT = 2


def partition_path(data_dir: Path, label: str) -> Path:
    """File path for a label's partition.

    Raises:
        StorageError: If the label can't be used as a file stem
    """
    if not label or label in (".", "..") or "/" in label or "\\" in label:
        raise StorageError(f"Label {label!r} is not a safe file name").with_context(
            label=label, path=str(data_dir)
        )
    return data_dir / f"{label}.json"


def serialize_partition(records: list[dict[str, Any]]) -> str:
    """Pretty-print a bucket, keeping source key order and non-ASCII text."""
    return json.dumps(records, indent=JSON_INDENT, ensure_ascii=False)


def ensure_directory(path: Path) -> None:
    """Create ``path`` and its parents if missing.

    Raises:
        StorageError: If the directory can't be created
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Could not create directory {path}", cause=e).with_context(
            path=str(path)
        )


def write_partitions(buckets: BucketMap, data_dir: Path) -> list[Path]:
    """Write one JSON file per label.

    Args:
        buckets: Classifier output
        data_dir: Destination directory (created if absent)

    Returns:
        Written file paths, in bucket order

    Raises:
        StorageError: On the first directory or write failure
    """
    data_dir = Path(data_dir)
    ensure_directory(data_dir)

    written = []
    for label, records in buckets.items():
        path = partition_path(data_dir, label)
        try:
            path.write_text(serialize_partition(records), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not write partition {path}", cause=e).with_context(
                path=str(path), label=label
            )

        logger.info("partition_written", path=str(path), label=label, records=len(records))
        written.append(path)

    return written


def read_partition(path: Path) -> list[dict[str, Any]]:
    """Load a partition file written by ``write_partitions``."""
    return json.loads(Path(path).read_text(encoding="utf-8"))
