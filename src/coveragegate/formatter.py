"""Human-readable formatting of metrics, baselines and values."""

from typing import Optional

from coveragegate.constants import NOT_AVAILABLE
from coveragegate.model import Baseline, Count, Coverage, Difference, Metric, Value


class ElementFormatter:
    """Formats values for reports, tables and the API.

    Absolute coverage values render as ``75.00%``, absolute counts as plain
    integers. Deltas always carry an explicit sign: ``+5.00%`` for coverage
    metrics and ``-10`` for counts.
    """

    def get_display_name(self, element) -> str:
        """Return the display name of a metric or the title of a baseline."""
        if isinstance(element, Metric):
            return element.display_name
        if isinstance(element, Baseline):
            return element.title
        raise TypeError(f"Unsupported element: {element!r}")

    def format(self, value: Optional[Value]) -> str:
        """Format a value without a sign prefix (deltas are delegated)."""
        if value is None:
            return NOT_AVAILABLE
        if isinstance(value, Difference):
            return self.format_delta(value)
        if isinstance(value, Coverage):
            if not value.is_set:
                return NOT_AVAILABLE
            return f"{value.percentage:.2f}%"
        if isinstance(value, Count):
            return str(value.value)
        raise TypeError(f"Unsupported value: {value!r}")

    def format_delta(self, value: Optional[Value]) -> str:
        """Format a value with an explicit leading sign."""
        if value is None:
            return NOT_AVAILABLE
        number = value.numeric + 0.0  # normalizes -0.0
        if value.metric.is_coverage:
            return f"{number:+.2f}%"
        if not number.is_integer():
            return f"{number:+.2f}"
        return f"{int(number):+d}"

    def format_value(self, baseline: Baseline, value: Optional[Value]) -> str:
        """Format a value the way the given baseline displays it."""
        if baseline.is_delta:
            return self.format_delta(value)
        return self.format(value)

    @staticmethod
    def format_threshold(threshold: float) -> str:
        return f"{threshold:.2f}"

    def get_metric_items(self) -> list[tuple[str, str]]:
        """Return (display name, enum name) pairs of all metrics."""
        return [(metric.display_name, metric.name) for metric in Metric]

    def get_baseline_items(self) -> list[tuple[str, str]]:
        """Return (title, enum name) pairs of all baselines."""
        return [(baseline.title, baseline.name) for baseline in Baseline]
