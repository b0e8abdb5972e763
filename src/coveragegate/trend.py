"""Trend chart data models built from the coverage history of a job."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from coveragegate.model import Baseline, Coverage, Metric
from coveragegate.statistics import CoverageStatistics

# Series shown in the coverage chart, in drawing order
COVERAGE_SERIES: list[tuple[Metric, str]] = [
    (Metric.LINE, "#4caf50"),
    (Metric.BRANCH, "#2e7d32"),
    (Metric.MUTATION, "#1b5e20"),
    (Metric.TEST_STRENGTH, "#a5d6a7"),
    (Metric.MCDC_PAIR, "#ef9a9a"),
    (Metric.METHOD, "#e53935"),
    (Metric.FUNCTION_CALL, "#b71c1c"),
]

# Series shown in the software metrics chart
METRIC_SERIES: list[tuple[Metric, str]] = [
    (Metric.CYCLOMATIC_COMPLEXITY, "#fb8c00"),
    (Metric.COGNITIVE_COMPLEXITY, "#fb8c00"),
    (Metric.NPATH_COMPLEXITY, "#fb8c00"),
    (Metric.NCSS, "#fb8c00"),
]


@dataclass
class BuildEntry:
    """Coverage statistics of one build in a job's history."""

    build_number: int
    statistics: CoverageStatistics
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or f"#{self.build_number}"


@dataclass
class LinesDataSet:
    """Values of several series over a sequence of builds (oldest first)."""

    domain_axis_labels: list[str] = field(default_factory=list)
    build_numbers: list[int] = field(default_factory=list)
    series: dict[str, list[Optional[float]]] = field(default_factory=dict)

    def add(self, entry: BuildEntry, values: dict[str, float]) -> None:
        position = len(self.build_numbers)
        self.domain_axis_labels.append(entry.label)
        self.build_numbers.append(entry.build_number)
        for series_id, data in self.series.items():
            data.append(values.get(series_id))
        for series_id, value in values.items():
            if series_id not in self.series:
                self.series[series_id] = [None] * position + [value]

    def is_empty(self) -> bool:
        return not self.build_numbers

    def contains_series(self, series_id: str) -> bool:
        return series_id in self.series

    def get_series(self, series_id: str) -> list[Optional[float]]:
        return self.series.get(series_id, [])

    def _all_values(self) -> list[float]:
        return [v for data in self.series.values() for v in data if v is not None]

    @property
    def maximum_value(self) -> float:
        return max(self._all_values(), default=0.0)

    @property
    def minimum_value(self) -> float:
        return min(self._all_values(), default=0.0)


class CoverageSeriesBuilder:
    """Extracts the charted values from the statistics of a build."""

    def __init__(self, baseline: Baseline = Baseline.PROJECT):
        self.baseline = baseline

    def compute_series(self, statistics: CoverageStatistics, metrics: bool = False) -> dict[str, float]:
        series = {}
        for metric, _ in METRIC_SERIES if metrics else COVERAGE_SERIES:
            value = statistics.get_value(self.baseline, metric)
            if value is None:
                continue
            if isinstance(value, Coverage):
                series[metric.tag_name] = round(value.percentage, 2)
            else:
                series[metric.tag_name] = value.numeric
        return series

    def create_data_set(
        self, entries: Iterable[BuildEntry], metrics: bool = False, max_builds: int = 0
    ) -> LinesDataSet:
        """Create the data set for builds given newest first.

        Args:
            entries: Builds in descending order, the current build first
            metrics: Extract software metrics instead of coverage percentages
            max_builds: Number of builds to include, 0 for all
        """
        selected = list(entries)
        if max_builds > 0:
            selected = selected[:max_builds]

        data_set = LinesDataSet()
        for entry in reversed(selected):
            data_set.add(entry, self.compute_series(entry.statistics, metrics))
        return data_set


class CoverageTrendChart:
    """Builds the JSON model of the coverage or software metrics trend."""

    def __init__(self, builder: Optional[CoverageSeriesBuilder] = None):
        self.builder = builder or CoverageSeriesBuilder()

    def create(self, entries: Iterable[BuildEntry], metrics: bool = False, max_builds: int = 0) -> dict:
        """Create the chart model.

        Args:
            entries: Builds in descending order, the current build first
            metrics: Chart software metrics instead of coverage percentages
            max_builds: Number of builds to include, 0 for all

        Returns:
            Dict with axis labels, series and range, ready for JSON
        """
        data_set = self.builder.create_data_set(entries, metrics, max_builds)
        model = {
            "domainAxisLabels": data_set.domain_axis_labels,
            "buildNumbers": data_set.build_numbers,
            "series": [],
        }
        if data_set.is_empty():
            return model

        filled = not metrics and not (
            data_set.contains_series(Metric.MCDC_PAIR.tag_name)
            or data_set.contains_series(Metric.FUNCTION_CALL.tag_name)
        )
        model["continuousRangeAxis"] = True
        model["rangeMax"] = data_set.maximum_value if metrics else 100
        model["rangeMin"] = data_set.minimum_value

        for metric, color in METRIC_SERIES if metrics else COVERAGE_SERIES:
            if data_set.contains_series(metric.tag_name):
                model["series"].append({
                    "id": metric.tag_name,
                    "name": metric.display_name,
                    "color": color,
                    "filled": filled,
                    "data": data_set.get_series(metric.tag_name),
                })
        return model
