"""Tests for CoverageStatistics."""

import math

import pytest

from coveragegate.model import Baseline, Count, Coverage, Difference, Metric
from coveragegate.statistics import CoverageStatistics, compute_delta


class TestCoverageStatistics:
    def test_get_value(self, statistics):
        assert statistics.get_value(Baseline.PROJECT, Metric.FILE) == Coverage(Metric.FILE, 3, 1)
        assert statistics.get_value(Baseline.PROJECT_DELTA, Metric.LINE) == Difference(Metric.LINE, 5)
        assert statistics.get_value(Baseline.PROJECT, Metric.LOC) == Count(Metric.LOC, 1000)

    def test_missing_values(self, statistics, project_statistics):
        assert statistics.get_value(Baseline.PROJECT, Metric.BRANCH) is None
        assert statistics.get_value(Baseline.INDIRECT, Metric.LINE) is None
        assert not project_statistics.contains_value(Baseline.MODIFIED_LINES, Metric.FILE)
        assert project_statistics.contains_value(Baseline.PROJECT, Metric.FILE)

    def test_get_values_ordered_by_metric(self, statistics):
        metrics = [value.metric for value in statistics.get_values(Baseline.PROJECT)]
        assert metrics == [
            Metric.FILE,
            Metric.LINE,
            Metric.LOC,
            Metric.CYCLOMATIC_COMPLEXITY,
            Metric.NPATH_COMPLEXITY,
        ]

    def test_unset_coverage_is_dropped(self):
        statistics = CoverageStatistics(project_values=[Coverage(Metric.BRANCH, 0, 0)])
        assert statistics.get_value(Baseline.PROJECT, Metric.BRANCH) is None
        assert statistics.is_empty()

    def test_is_empty(self, statistics):
        assert CoverageStatistics().is_empty()
        assert not statistics.is_empty()

    def test_snapshot_is_read_only(self, statistics):
        with pytest.raises(TypeError):
            statistics._values[Baseline.PROJECT][Metric.BRANCH] = Coverage(Metric.BRANCH, 1, 1)


class TestFromDict:
    def test_load(self):
        statistics = CoverageStatistics.from_dict(
            {
                "project": {
                    "line": {"covered": 5, "missed": 5},
                    "cyclomatic-complexity": 150,
                },
                "projectDelta": {"line": 5.0, "LOC": -3},
                "modified-lines": {"BRANCH": {"covered": 1, "missed": 3}},
            }
        )
        assert statistics.get_value(Baseline.PROJECT, Metric.LINE).percentage == 50.0
        assert statistics.get_value(Baseline.PROJECT, Metric.CYCLOMATIC_COMPLEXITY) == Count(
            Metric.CYCLOMATIC_COMPLEXITY, 150
        )
        assert statistics.get_value(Baseline.PROJECT_DELTA, Metric.LOC) == Difference(Metric.LOC, -3)
        assert statistics.get_value(Baseline.MODIFIED_LINES, Metric.BRANCH).percentage == 25.0

    def test_round_trip_of_fixture(self, statistics):
        loaded = CoverageStatistics.from_dict(statistics.to_dict())
        for baseline in Baseline:
            assert loaded.get_values(baseline) == statistics.get_values(baseline)

    def test_to_dict_keys(self, project_statistics):
        data = project_statistics.to_dict()
        assert set(data) == {"project", "project-delta"}
        assert data["project"]["file"] == {"covered": 3, "missed": 1}
        assert data["project"]["loc"] == 1000
        assert data["project-delta"]["line"] == 5

    @pytest.mark.parametrize(
        "data, match",
        [
            ([], "must be a mapping"),
            ({"overall": {}}, "Unknown baseline"),
            ({"project": {"lines": 5}}, "Unknown metric"),
            ({"project": [1, 2]}, "must be a mapping"),
            ({"project": {"line": 50}}, "need 'covered' and 'missed'"),
            ({"project": {"loc": "many"}}, "expected a number"),
            ({"project": {"loc": True}}, "expected a number"),
            ({"projectDelta": {"line": math.nan}}, "must be finite"),
        ],
    )
    def test_invalid_input(self, data, match):
        with pytest.raises(ValueError, match=match):
            CoverageStatistics.from_dict(data)

    @pytest.mark.parametrize(
        "data",
        [
            {"project": {"loc": 4.6}},
            {"project": {"file": {"covered": 3.9, "missed": 0.2}}},
            {"modifiedLines": {"line": {"covered": 3, "missed": 1.5}}},
            {"projectDelta": {"loc": 4.6}},
        ],
    )
    def test_fractional_counts_rejected(self, data):
        with pytest.raises(ValueError, match="expected a whole number"):
            CoverageStatistics.from_dict(data)

    def test_whole_floats_accepted(self):
        statistics = CoverageStatistics.from_dict(
            {"project": {"loc": 1000.0, "line": {"covered": 5.0, "missed": 5}}, "projectDelta": {"line": 2.5}}
        )
        assert statistics.get_value(Baseline.PROJECT, Metric.LOC) == Count(Metric.LOC, 1000)
        assert statistics.get_value(Baseline.PROJECT, Metric.LINE) == Coverage(Metric.LINE, 5, 5)
        assert statistics.get_value(Baseline.PROJECT_DELTA, Metric.LINE) == Difference(Metric.LINE, 2.5)

    def test_negative_coverage_rejected(self):
        with pytest.raises(ValueError, match="must not be negative"):
            CoverageStatistics.from_dict({"project": {"line": {"covered": -1, "missed": 3}}})


class TestComputeDelta:
    def test_delta_of_matching_values(self):
        current = [Coverage(Metric.LINE, 6, 4), Count(Metric.LOC, 1000), Count(Metric.TESTS, 5)]
        reference = [Coverage(Metric.LINE, 5, 5), Count(Metric.LOC, 1100)]

        delta = compute_delta(current, reference)

        assert [d.metric for d in delta] == [Metric.LINE, Metric.LOC]
        assert delta[0].numeric == pytest.approx(10.0)
        assert delta[1] == Difference(Metric.LOC, -100)

    def test_unset_reference_is_skipped(self):
        delta = compute_delta([Coverage(Metric.BRANCH, 1, 1)], [Coverage(Metric.BRANCH, 0, 0)])
        assert delta == []

    def test_differences_are_ignored(self):
        current = [Difference(Metric.LINE, 5), Count(Metric.LOC, 1000), Difference(Metric.TESTS, 2)]
        reference = [Difference(Metric.LINE, 3), Count(Metric.LOC, 900), Count(Metric.TESTS, 5)]

        assert compute_delta(current, reference) == [Difference(Metric.LOC, 100)]

    def test_reference_difference_does_not_shadow_value(self):
        reference = [Count(Metric.LOC, 900), Difference(Metric.LOC, 10)]
        assert compute_delta([Count(Metric.LOC, 1000)], reference) == [Difference(Metric.LOC, 100)]
