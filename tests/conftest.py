"""Shared fixtures for coveragegate tests."""

import pytest

from coveragegate.model import Count, Coverage, Difference, Metric
from coveragegate.statistics import CoverageStatistics


def make_statistics(only_project: bool = False) -> CoverageStatistics:
    """Statistics with file coverage 75%, line coverage 50% and a few counts."""
    file_coverage = Coverage(Metric.FILE, 3, 1)
    line_coverage = Coverage(Metric.LINE, 5, 5)
    project = [
        file_coverage,
        line_coverage,
        Count(Metric.CYCLOMATIC_COMPLEXITY, 150),
        Count(Metric.NPATH_COMPLEXITY, 15),
        Count(Metric.LOC, 1000),
    ]
    project_delta = [
        Difference(Metric.FILE, -10),
        Difference(Metric.LINE, 5),
        Difference(Metric.CYCLOMATIC_COMPLEXITY, -10),
        Difference(Metric.LOC, 5),
    ]
    if only_project:
        return CoverageStatistics(project_values=project, project_delta=project_delta)

    delta = [Difference(Metric.FILE, -10), Difference(Metric.LINE, 5)]
    return CoverageStatistics(
        project_values=project,
        project_delta=project_delta,
        modified_lines_values=[file_coverage, line_coverage, Count(Metric.LOC, 1000)],
        modified_lines_delta=delta,
        modified_files_values=[file_coverage, line_coverage],
        modified_files_delta=delta,
    )


@pytest.fixture
def statistics() -> CoverageStatistics:
    return make_statistics()


@pytest.fixture
def project_statistics() -> CoverageStatistics:
    return make_statistics(only_project=True)
