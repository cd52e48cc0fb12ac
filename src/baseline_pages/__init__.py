"""
baseline-pages: static pages of web features grouped by Baseline status.

Example:
    >>> from baseline_pages import BaselinePipeline, PipelineConfig
    >>> result = BaselinePipeline(PipelineConfig()).run()
    >>> result.success
    True
"""

from baseline_pages.classifier import BucketMap, bucket_counts, classify, is_feature_record
from baseline_pages.config import PipelineConfig, UNKNOWN_LABEL
from baseline_pages.pipeline import BaselinePipeline, PipelineResult
from baseline_pages.renderer import PageRenderer
from baseline_pages.source import FeatureSource
from baseline_pages.writer import read_partition, write_partitions

__version__ = "0.1.0"

__all__ = [
    "BucketMap",
    "classify",
    "bucket_counts",
    "is_feature_record",
    "PipelineConfig",
    "UNKNOWN_LABEL",
    "BaselinePipeline",
    "PipelineResult",
    "PageRenderer",
    "FeatureSource",
    "write_partitions",
    "read_partition",
    "__version__",
]
