"""Metrics, baselines and measured values."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union


class Metric(Enum):
    """A measurable quantity of a coverage report.

    Members are ordered by declaration, which is also the order used when
    metrics are listed in reports.
    """

    MODULE = "module"
    PACKAGE = "package"
    FILE = "file"
    CLASS = "class"
    METHOD = "method"
    LINE = "line"
    BRANCH = "branch"
    INSTRUCTION = "instruction"
    MCDC_PAIR = "mcdc-pair"
    FUNCTION_CALL = "function-call"
    MUTATION = "mutation"
    TEST_STRENGTH = "test-strength"
    TESTS = "tests"
    LOC = "loc"
    NCSS = "ncss"
    CYCLOMATIC_COMPLEXITY = "cyclomatic-complexity"
    COGNITIVE_COMPLEXITY = "cognitive-complexity"
    NPATH_COMPLEXITY = "npath-complexity"

    def __lt__(self, other):
        if not isinstance(other, Metric):
            return NotImplemented
        return _METRIC_ORDER[self] < _METRIC_ORDER[other]

    @property
    def tag_name(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _METRIC_INFO[self].display_name

    @property
    def is_coverage(self) -> bool:
        """Whether values of this metric are covered/missed ratios."""
        return _METRIC_INFO[self].coverage

    @property
    def larger_is_better(self) -> bool:
        return _METRIC_INFO[self].larger_is_better

    @classmethod
    def from_name(cls, name: str) -> "Metric":
        """Resolve a metric from its enum name or tag name (case-insensitive)."""
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown metric '{name}'") from None


class _MetricInfo(NamedTuple):
    display_name: str
    coverage: bool
    larger_is_better: bool = True


_METRIC_INFO: dict[Metric, _MetricInfo] = {
    Metric.MODULE: _MetricInfo("Module Coverage", True),
    Metric.PACKAGE: _MetricInfo("Package Coverage", True),
    Metric.FILE: _MetricInfo("File Coverage", True),
    Metric.CLASS: _MetricInfo("Class Coverage", True),
    Metric.METHOD: _MetricInfo("Method Coverage", True),
    Metric.LINE: _MetricInfo("Line Coverage", True),
    Metric.BRANCH: _MetricInfo("Branch Coverage", True),
    Metric.INSTRUCTION: _MetricInfo("Instruction Coverage", True),
    Metric.MCDC_PAIR: _MetricInfo("MC/DC Pair Coverage", True),
    Metric.FUNCTION_CALL: _MetricInfo("Function Call Coverage", True),
    Metric.MUTATION: _MetricInfo("Mutation Coverage", True),
    Metric.TEST_STRENGTH: _MetricInfo("Test Strength", True),
    Metric.TESTS: _MetricInfo("Number of Tests", False),
    Metric.LOC: _MetricInfo("Lines of Code", False, larger_is_better=False),
    Metric.NCSS: _MetricInfo("Non Commenting Source Statements", False, larger_is_better=False),
    Metric.CYCLOMATIC_COMPLEXITY: _MetricInfo("Cyclomatic Complexity", False, larger_is_better=False),
    Metric.COGNITIVE_COMPLEXITY: _MetricInfo("Cognitive Complexity", False, larger_is_better=False),
    Metric.NPATH_COMPLEXITY: _MetricInfo("N-Path Complexity", False, larger_is_better=False),
}

_METRIC_ORDER: dict[Metric, int] = {metric: index for index, metric in enumerate(Metric)}


class Baseline(Enum):
    """The scope a coverage value is measured against."""

    PROJECT = "project"
    PROJECT_DELTA = "project-delta"
    MODIFIED_LINES = "modified-lines"
    MODIFIED_LINES_DELTA = "modified-lines-delta"
    MODIFIED_FILES = "modified-files"
    MODIFIED_FILES_DELTA = "modified-files-delta"
    INDIRECT = "indirect"

    @property
    def title(self) -> str:
        return _BASELINE_INFO[self].title

    @property
    def anchor(self) -> str:
        return _BASELINE_INFO[self].anchor

    @property
    def url(self) -> str:
        return "#" + self.anchor

    @property
    def is_delta(self) -> bool:
        return _BASELINE_INFO[self].delta

    @classmethod
    def from_name(cls, name: str) -> "Baseline":
        """Resolve a baseline from its enum name, kebab-case or camelCase form."""
        key = name.strip()
        if "_" not in key and "-" not in key and key != key.upper():
            # camelCase, e.g. modifiedLinesDelta
            key = "".join("_" + c if c.isupper() else c for c in key).lstrip("_")
        key = key.upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown baseline '{name}'") from None


class _BaselineInfo(NamedTuple):
    title: str
    anchor: str
    delta: bool


_BASELINE_INFO: dict[Baseline, _BaselineInfo] = {
    Baseline.PROJECT: _BaselineInfo("Overall project", "overview", False),
    Baseline.PROJECT_DELTA: _BaselineInfo(
        "Overall project (difference to reference job)", "overview", True
    ),
    Baseline.MODIFIED_LINES: _BaselineInfo("Modified code lines", "modifiedLinesCoverage", False),
    Baseline.MODIFIED_LINES_DELTA: _BaselineInfo(
        "Modified code lines (difference to modified files)", "modifiedLinesCoverage", True
    ),
    Baseline.MODIFIED_FILES: _BaselineInfo("Modified files", "modifiedFilesCoverage", False),
    Baseline.MODIFIED_FILES_DELTA: _BaselineInfo(
        "Modified files (difference to reference job)", "modifiedFilesCoverage", True
    ),
    Baseline.INDIRECT: _BaselineInfo("Indirect changes", "indirectCoverage", False),
}


# ==================== Values ====================


@dataclass(frozen=True)
class Difference:
    """Signed delta of one metric between two measurements.

    Coverage metrics are expressed in percentage points, count metrics as a
    raw count delta.
    """

    metric: Metric
    delta: float

    @property
    def numeric(self) -> float:
        return float(self.delta)


@dataclass(frozen=True)
class Coverage:
    """Covered and missed items of a coverage metric."""

    metric: Metric
    covered: int
    missed: int

    def __post_init__(self):
        if self.covered < 0 or self.missed < 0:
            raise ValueError(
                f"Coverage counts must not be negative: covered={self.covered}, missed={self.missed}"
            )

    @property
    def total(self) -> int:
        return self.covered + self.missed

    @property
    def is_set(self) -> bool:
        return self.total > 0

    @property
    def percentage(self) -> float:
        if not self.is_set:
            return 0.0
        return self.covered * 100.0 / self.total

    @property
    def numeric(self) -> float:
        return self.percentage

    def subtract(self, other: "Coverage") -> Difference:
        """Return the difference in percentage points to ``other``."""
        _check_same_metric(self, other)
        return Difference(self.metric, self.percentage - other.percentage)


@dataclass(frozen=True)
class Count:
    """An absolute count such as complexity or lines of code."""

    metric: Metric
    value: int

    @property
    def numeric(self) -> float:
        return float(self.value)

    def subtract(self, other: "Count") -> Difference:
        _check_same_metric(self, other)
        return Difference(self.metric, self.value - other.value)


Value = Union[Coverage, Count, Difference]


def _check_same_metric(first, second):
    if first.metric is not second.metric:
        raise ValueError(
            f"Cannot subtract {second.metric.name} from {first.metric.name}"
        )
