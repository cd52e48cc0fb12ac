"""Tests for the feature classifier."""

import pytest

from baseline_pages.classifier import (
    baseline_label,
    bucket_counts,
    classify,
    is_feature_record,
)
from baseline_pages.errors import DocumentTooDeepError, ParseError


class TestIsFeatureRecord:
    """Test the record predicate."""

    def test_status_with_baseline(self):
        assert is_feature_record({"status": {"baseline": "high"}})

    def test_baseline_present_but_false(self):
        assert is_feature_record({"status": {"baseline": False}})

    def test_status_without_baseline(self):
        assert not is_feature_record({"status": {"support": {}}})

    def test_status_not_a_mapping(self):
        assert not is_feature_record({"status": "baseline"})

    def test_non_mapping(self):
        assert not is_feature_record(["status", "baseline"])
        assert not is_feature_record(None)


class TestBaselineLabel:
    """Test label derivation."""

    @pytest.mark.parametrize("value", [False, None, "", 0])
    def test_falsy_values_collapse_to_unknown(self, value):
        assert baseline_label({"status": {"baseline": value}}) == "unknown"

    def test_string_used_verbatim(self):
        assert baseline_label({"status": {"baseline": "low"}}) == "low"

    def test_true_is_lowercased(self):
        assert baseline_label({"status": {"baseline": True}}) == "true"


class TestClassify:
    """Test the recursive walk."""

    def test_single_widely_available_feature(self):
        document = {"a": {"status": {"baseline": "high"}}}

        buckets = classify(document)

        assert buckets == {"high": [{"status": {"baseline": "high"}}]}

    def test_false_baseline_goes_to_unknown(self):
        document = {"a": {"status": {"baseline": False}}, "b": {"x": 1}}

        buckets = classify(document)

        assert buckets == {"unknown": [{"status": {"baseline": False}}]}

    def test_nested_groups_keep_document_order(self):
        f1 = {"id": 1, "status": {"baseline": "low"}}
        f2 = {"id": 2, "status": {"baseline": "low"}}
        document = {"group1": {"f1": f1, "f2": f2}}

        buckets = classify(document)

        assert buckets == {"low": [f1, f2]}
        assert buckets["low"][0] is f1

    def test_record_is_not_descended_into(self):
        inner = {"status": {"baseline": "low"}}
        outer = {"status": {"baseline": "high"}, "children": {"inner": inner}}

        buckets = classify({"outer": outer})

        assert list(buckets) == ["high"]
        assert buckets["high"] == [outer]

    def test_lists_are_walked_by_index(self):
        document = [
            {"status": {"baseline": "high"}},
            [{"status": {"baseline": "low"}}],
            "scalar",
            None,
        ]

        buckets = classify(document)

        assert bucket_counts(buckets) == {"high": 1, "low": 1}

    def test_status_without_baseline_is_walked(self):
        nested = {"status": {"baseline": "low"}}
        document = {"group": {"status": {"note": "pending"}, "child": nested}}

        assert classify(document) == {"low": [nested]}

    @pytest.mark.parametrize("root", [None, 42, "text", True, 1.5])
    def test_scalar_root_yields_empty_map(self, root):
        assert classify(root) == {}

    def test_composites_without_features_contribute_nothing(self):
        document = {"a": {"b": [1, 2, {"c": {}}]}, "d": []}

        assert classify(document) == {}

    def test_every_record_lands_in_exactly_one_bucket(self, sample_document):
        buckets = classify(sample_document)

        all_records = [r for records in buckets.values() for r in records]
        assert len(all_records) == 5
        assert len({id(r) for r in all_records}) == 5
        assert bucket_counts(buckets) == {"high": 1, "low": 2, "unknown": 2}

    def test_labels_in_first_discovered_order(self, sample_document):
        assert list(classify(sample_document)) == ["high", "low", "unknown"]

    def test_records_are_not_copied(self, sample_document):
        buckets = classify(sample_document)

        assert buckets["high"][0] is sample_document["grid"]


class TestDepthGuard:
    """Test the nesting guard."""

    def test_too_deep_raises(self):
        document = {"status": {"baseline": "high"}}
        for _ in range(10):
            document = {"wrap": document}

        with pytest.raises(DocumentTooDeepError) as exc_info:
            classify(document, max_depth=5)

        assert isinstance(exc_info.value, ParseError)
        assert exc_info.value.max_depth == 5

    def test_depth_at_limit_is_allowed(self):
        document = {"status": {"baseline": "high"}}
        for _ in range(5):
            document = {"wrap": document}

        assert bucket_counts(classify(document, max_depth=5)) == {"high": 1}

    def test_cycle_is_reported(self):
        document: dict = {}
        document["self"] = document

        with pytest.raises(DocumentTooDeepError):
            classify(document, max_depth=50)
