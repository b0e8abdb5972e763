"""coveragegate - Evaluate code coverage quality gates against per-build statistics."""

__version__ = "0.1.0"

from coveragegate.handlers import BuildResult, BuildStatusHandler, NullResultHandler, ResultHandler
from coveragegate.log import FilteredLog
from coveragegate.model import Baseline, Count, Coverage, Difference, Metric
from coveragegate.quality_gates import (
    CoverageQualityGate,
    CoverageQualityGateEvaluator,
    QualityGateCriticality,
    QualityGateResult,
    QualityGateStatus,
)
from coveragegate.statistics import CoverageStatistics


# Lazy imports for presentation and configuration modules
def __getattr__(name):
    """Lazy import for optional modules."""
    if name == "CoverageApi":
        from coveragegate.api import CoverageApi

        return CoverageApi
    if name == "CoverageMetricColumn":
        from coveragegate.column import CoverageMetricColumn

        return CoverageMetricColumn
    if name == "CoverageTrendChart":
        from coveragegate.trend import CoverageTrendChart

        return CoverageTrendChart
    if name == "RecorderConfig":
        from coveragegate.config import RecorderConfig

        return RecorderConfig
    if name == "ConfigurationError":
        from coveragegate.config import ConfigurationError

        return ConfigurationError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Baseline",
    "BuildResult",
    "BuildStatusHandler",
    "ConfigurationError",
    "Count",
    "Coverage",
    "CoverageApi",
    "CoverageMetricColumn",
    "CoverageQualityGate",
    "CoverageQualityGateEvaluator",
    "CoverageStatistics",
    "CoverageTrendChart",
    "Difference",
    "FilteredLog",
    "Metric",
    "NullResultHandler",
    "QualityGateCriticality",
    "QualityGateResult",
    "QualityGateStatus",
    "RecorderConfig",
    "ResultHandler",
]
