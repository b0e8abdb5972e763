"""Job list column that shows one coverage metric of the latest build."""

from dataclasses import dataclass
from typing import Optional

from coveragegate.color import DEFAULT_COLOR, ColorProvider, DisplayColors, display_colors_for
from coveragegate.constants import DEFAULT_COVERAGE_URL_NAME, NOT_AVAILABLE
from coveragegate.formatter import ElementFormatter
from coveragegate.model import Baseline, Metric, Value
from coveragegate.statistics import CoverageStatistics

FORMATTER = ElementFormatter()


@dataclass
class CoverageMetricColumn:
    """Renders the value of a metric and baseline for a job.

    All methods take the statistics of the job's last completed build, or
    None if there is no such build or it has no coverage results.
    """

    column_name: str = "Coverage"
    metric: Metric = Metric.LINE
    baseline: Baseline = Baseline.PROJECT

    def coverage_value(self, statistics: Optional[CoverageStatistics]) -> Optional[Value]:
        if statistics is None:
            return None
        return statistics.get_value(self.baseline, self.metric)

    def coverage_text(self, statistics: Optional[CoverageStatistics]) -> str:
        value = self.coverage_value(statistics)
        if value is None:
            return NOT_AVAILABLE
        return FORMATTER.format_value(self.baseline, value)

    def display_colors(
        self, value: Optional[Value], provider: Optional[ColorProvider] = None
    ) -> DisplayColors:
        if value is None:
            return DEFAULT_COLOR
        return display_colors_for(self.baseline, self.metric, value, provider)

    def relative_coverage_url(
        self, statistics: Optional[CoverageStatistics], url_name: str = DEFAULT_COVERAGE_URL_NAME
    ) -> str:
        """Link to the details of the baseline, empty if there are no results."""
        if statistics is None:
            return ""
        return f"{url_name}/{self.baseline.url}"

    @staticmethod
    def background_color_fill_percentage(text: str) -> str:
        """Width of the background bar for a formatted value.

        Signed (delta) values fill the whole cell.
        """
        if text.startswith(("+", "-")):
            return "100%"
        return text.replace(",", ".")

    def to_dict(self) -> dict:
        return {
            "columnName": self.column_name,
            "metric": self.metric.name,
            "baseline": self.baseline.name,
        }
