"""Per-build coverage statistics snapshot."""

import logging
import math
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Optional

from coveragegate.model import Baseline, Count, Coverage, Difference, Metric, Value

logger = logging.getLogger(__name__)


class CoverageStatistics:
    """Immutable set of computed values per baseline and metric.

    The snapshot only answers point lookups. Combinations that were never
    computed (no reference build, metric not reported by the tool, ...)
    simply have no value.
    """

    def __init__(
        self,
        project_values: Iterable[Value] = (),
        project_delta: Iterable[Difference] = (),
        modified_lines_values: Iterable[Value] = (),
        modified_lines_delta: Iterable[Difference] = (),
        modified_files_values: Iterable[Value] = (),
        modified_files_delta: Iterable[Difference] = (),
        indirect_values: Iterable[Value] = (),
    ):
        values: dict[Baseline, dict[Metric, Value]] = {}
        for baseline, items in (
            (Baseline.PROJECT, project_values),
            (Baseline.PROJECT_DELTA, project_delta),
            (Baseline.MODIFIED_LINES, modified_lines_values),
            (Baseline.MODIFIED_LINES_DELTA, modified_lines_delta),
            (Baseline.MODIFIED_FILES, modified_files_values),
            (Baseline.MODIFIED_FILES_DELTA, modified_files_delta),
            (Baseline.INDIRECT, indirect_values),
        ):
            by_metric = {}
            for value in items:
                if isinstance(value, Coverage) and not value.is_set:
                    continue
                by_metric[value.metric] = value
            values[baseline] = MappingProxyType(by_metric)
        self._values = MappingProxyType(values)

    def get_value(self, baseline: Baseline, metric: Metric) -> Optional[Value]:
        """Return the value of a metric for a baseline, or None if not computed."""
        by_metric = self._values.get(baseline)
        if by_metric is None:
            return None
        return by_metric.get(metric)

    def contains_value(self, baseline: Baseline, metric: Metric) -> bool:
        return self.get_value(baseline, metric) is not None

    def get_values(self, baseline: Baseline) -> list[Value]:
        """Return all values of a baseline ordered by metric."""
        by_metric = self._values.get(baseline, {})
        return [by_metric[metric] for metric in sorted(by_metric)]

    def is_empty(self) -> bool:
        return not any(self._values.values())

    def __repr__(self) -> str:
        counts = {b.name: len(v) for b, v in self._values.items() if v}
        return f"CoverageStatistics({counts})"

    # --- Loading ---

    @classmethod
    def from_dict(cls, data: Mapping) -> "CoverageStatistics":
        """Create statistics from a JSON-like mapping.

        Keys are baselines (``project``, ``projectDelta``, ``modified-lines``,
        ...), values map metric tag names to either ``{"covered": n,
        "missed": m}``, a count, or a signed delta for delta baselines.

        Raises:
            ValueError: If a baseline, metric or value cannot be interpreted
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Statistics must be a mapping, got {type(data).__name__}")

        parsed: dict[Baseline, list[Value]] = {baseline: [] for baseline in Baseline}
        for baseline_key, metrics in data.items():
            baseline = Baseline.from_name(str(baseline_key))
            if not isinstance(metrics, Mapping):
                raise ValueError(f"Values of baseline '{baseline_key}' must be a mapping")
            for metric_key, raw in metrics.items():
                metric = Metric.from_name(str(metric_key))
                parsed[baseline].append(_parse_value(baseline, metric, raw))

        statistics = cls(
            project_values=parsed[Baseline.PROJECT],
            project_delta=parsed[Baseline.PROJECT_DELTA],
            modified_lines_values=parsed[Baseline.MODIFIED_LINES],
            modified_lines_delta=parsed[Baseline.MODIFIED_LINES_DELTA],
            modified_files_values=parsed[Baseline.MODIFIED_FILES],
            modified_files_delta=parsed[Baseline.MODIFIED_FILES_DELTA],
            indirect_values=parsed[Baseline.INDIRECT],
        )
        logger.debug("Loaded %r", statistics)
        return statistics

    def to_dict(self) -> dict:
        result = {}
        for baseline, by_metric in self._values.items():
            if not by_metric:
                continue
            entries = {}
            for metric in sorted(by_metric):
                value = by_metric[metric]
                if isinstance(value, Coverage):
                    entries[metric.tag_name] = {"covered": value.covered, "missed": value.missed}
                elif isinstance(value, Count):
                    entries[metric.tag_name] = value.value
                else:
                    entries[metric.tag_name] = value.delta
            result[baseline.value] = entries
        return result


def compute_delta(current: Iterable[Value], reference: Iterable[Value]) -> list[Difference]:
    """Compute the differences of all metrics present in both value lists.

    Used to derive delta baselines, e.g. the project delta from the values of
    the current build and those of its reference build. Only absolute values
    are compared; differences in either list are ignored.
    """
    reference_by_metric = {
        value.metric: value for value in reference if not isinstance(value, Difference)
    }
    differences = []
    for value in current:
        if isinstance(value, Difference):
            continue
        previous = reference_by_metric.get(value.metric)
        if previous is None or type(previous) is not type(value):
            continue
        if isinstance(value, Coverage) and not (value.is_set and previous.is_set):
            continue
        differences.append(value.subtract(previous))
    return sorted(differences, key=lambda d: d.metric)


def _parse_value(baseline: Baseline, metric: Metric, raw) -> Value:
    """Convert one raw JSON entry into a value."""
    if baseline.is_delta:
        if metric.is_coverage:
            return Difference(metric, _to_number(raw, baseline, metric))
        return Difference(metric, _to_integer(raw, baseline, metric))

    if metric.is_coverage:
        if not isinstance(raw, Mapping) or "covered" not in raw or "missed" not in raw:
            raise ValueError(
                f"{baseline.name}/{metric.tag_name}: coverage values need 'covered' and 'missed'"
            )
        covered = _to_integer(raw["covered"], baseline, metric)
        missed = _to_integer(raw["missed"], baseline, metric)
        return Coverage(metric, covered, missed)

    return Count(metric, _to_integer(raw, baseline, metric))


def _to_number(raw, baseline: Baseline, metric: Metric) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"{baseline.name}/{metric.tag_name}: expected a number, got {raw!r}")
    if not math.isfinite(raw):
        raise ValueError(f"{baseline.name}/{metric.tag_name}: value must be finite")
    return float(raw)


def _to_integer(raw, baseline: Baseline, metric: Metric) -> int:
    number = _to_number(raw, baseline, metric)
    if not number.is_integer():
        raise ValueError(f"{baseline.name}/{metric.tag_name}: expected a whole number, got {raw!r}")
    return int(number)
