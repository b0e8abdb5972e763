"""Remote API document with the coverage results of a build."""

from typing import Optional

from coveragegate.formatter import ElementFormatter
from coveragegate.model import Baseline, Metric
from coveragegate.quality_gates import QualityGateResult
from coveragegate.statistics import CoverageStatistics

FORMATTER = ElementFormatter()


class CoverageApi:
    """Exposes statistics and quality gate results as plain, JSON-ready data.

    Every statistics map contains only the metrics that have a value for the
    baseline, keyed by tag name in alphabetical order. Delta maps carry
    signed values.
    """

    def __init__(
        self,
        statistics: CoverageStatistics,
        quality_gate_result: QualityGateResult,
        reference_build: Optional[str] = None,
    ):
        self.statistics = statistics
        self.quality_gate_result = quality_gate_result
        self.reference_build = reference_build or "-"

    @property
    def quality_gates(self) -> dict:
        return self.quality_gate_result.to_dict()

    @property
    def project_statistics(self) -> dict[str, str]:
        return self._map_to_strings(Baseline.PROJECT)

    @property
    def project_delta(self) -> dict[str, str]:
        return self._map_to_strings(Baseline.PROJECT_DELTA)

    @property
    def modified_files_statistics(self) -> dict[str, str]:
        return self._map_to_strings(Baseline.MODIFIED_FILES)

    @property
    def modified_files_delta(self) -> dict[str, str]:
        return self._map_to_strings(Baseline.MODIFIED_FILES_DELTA)

    @property
    def modified_lines_statistics(self) -> dict[str, str]:
        return self._map_to_strings(Baseline.MODIFIED_LINES)

    @property
    def modified_lines_delta(self) -> dict[str, str]:
        return self._map_to_strings(Baseline.MODIFIED_LINES_DELTA)

    def _map_to_strings(self, baseline: Baseline) -> dict[str, str]:
        values = {}
        for metric in Metric:
            value = self.statistics.get_value(baseline, metric)
            if value is not None:
                values[metric.tag_name] = FORMATTER.format_value(baseline, value)
        return dict(sorted(values.items()))

    def to_dict(self) -> dict:
        return {
            "qualityGates": self.quality_gates,
            "referenceBuild": self.reference_build,
            "projectStatistics": self.project_statistics,
            "projectDelta": self.project_delta,
            "modifiedFilesStatistics": self.modified_files_statistics,
            "modifiedFilesDelta": self.modified_files_delta,
            "modifiedLinesStatistics": self.modified_lines_statistics,
            "modifiedLinesDelta": self.modified_lines_delta,
        }
