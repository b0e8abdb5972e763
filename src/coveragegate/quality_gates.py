"""Quality gates for coverage statistics and their evaluation."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from coveragegate.constants import DEFAULT_THRESHOLD, NO_QUALITY_GATES_MESSAGE, NOT_AVAILABLE
from coveragegate.formatter import ElementFormatter
from coveragegate.handlers import ResultHandler
from coveragegate.log import FilteredLog
from coveragegate.model import Baseline, Metric
from coveragegate.statistics import CoverageStatistics

logger = logging.getLogger(__name__)

FORMATTER = ElementFormatter()


class QualityGateCriticality(Enum):
    """Severity of a violated quality gate: NOTE < UNSTABLE < FAILURE."""

    NOTE = 1
    UNSTABLE = 2
    FAILURE = 3

    @property
    def status(self) -> "QualityGateStatus":
        """Status reported when a gate of this criticality is violated."""
        return _CRITICALITY_STATUS[self]

    @classmethod
    def from_name(cls, name: str) -> "QualityGateCriticality":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown criticality '{name}'") from None


class QualityGateStatus(Enum):
    """Outcome of a quality gate, totally ordered by severity."""

    INACTIVE = 0
    PASSED = 1
    NOTE = 2
    WARNING = 3
    FAILED = 4

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    def worse_than(self, other: "QualityGateStatus") -> bool:
        return self.value > other.value

    def is_successful(self) -> bool:
        """Whether this status leaves the build result untouched."""
        return self in (QualityGateStatus.INACTIVE, QualityGateStatus.PASSED, QualityGateStatus.NOTE)


_STATUS_LABELS = {
    QualityGateStatus.INACTIVE: "Not built",
    QualityGateStatus.PASSED: "Success",
    QualityGateStatus.NOTE: "Note",
    QualityGateStatus.WARNING: "Unstable",
    QualityGateStatus.FAILED: "Failed",
}

_CRITICALITY_STATUS = {
    QualityGateCriticality.NOTE: QualityGateStatus.NOTE,
    QualityGateCriticality.UNSTABLE: QualityGateStatus.WARNING,
    QualityGateCriticality.FAILURE: QualityGateStatus.FAILED,
}


@dataclass(frozen=True)
class CoverageQualityGate:
    """A threshold on the value of one metric for one baseline.

    The gate is satisfied when the actual value is greater than or equal to
    the threshold. A non-negative threshold on a delta baseline thus asserts
    that the value must not have decreased.
    """

    metric: Metric
    baseline: Baseline = Baseline.PROJECT
    threshold: float = DEFAULT_THRESHOLD
    criticality: QualityGateCriticality = QualityGateCriticality.UNSTABLE

    @property
    def name(self) -> str:
        return f"{FORMATTER.get_display_name(self.baseline)} - {FORMATTER.get_display_name(self.metric)}"

    def to_dict(self) -> dict:
        return {
            "metric": self.metric.name,
            "baseline": self.baseline.name,
            "threshold": self.threshold,
            "criticality": self.criticality.name,
        }


@dataclass(frozen=True)
class QualityGateResultItem:
    """Outcome of evaluating a single gate."""

    gate: CoverageQualityGate
    status: QualityGateStatus
    actual_value: str
    message: str

    def to_dict(self) -> dict:
        return {
            "name": self.gate.name,
            "threshold": self.gate.threshold,
            "value": self.actual_value,
            "result": self.status.name,
        }


class QualityGateResult:
    """Aggregated, ordered outcome of all quality gates of a build.

    The overall status is the most severe status of all items; it starts as
    INACTIVE so that gates without a value never change it. Items are only
    added through ``add``; all accessors return immutable views.
    """

    def __init__(self):
        self._overall_status = QualityGateStatus.INACTIVE
        self._results: list[QualityGateResultItem] = []

    def __repr__(self) -> str:
        return f"QualityGateResult({self._overall_status.name}, {len(self._results)} items)"

    @property
    def overall_status(self) -> QualityGateStatus:
        return self._overall_status

    @property
    def results(self) -> tuple[QualityGateResultItem, ...]:
        return tuple(self._results)

    def add(
        self, gate: CoverageQualityGate, status: QualityGateStatus, actual_value: str
    ) -> QualityGateResultItem:
        """Record the outcome of a gate and update the overall status."""
        message = (
            f"[{gate.name}]: «{status.label}» - "
            f"(Actual value: {actual_value}, Quality gate: {FORMATTER.format_threshold(gate.threshold)})"
        )
        item = QualityGateResultItem(gate=gate, status=status, actual_value=actual_value, message=message)
        self._results.append(item)
        if status.worse_than(self._overall_status):
            self._overall_status = status
        return item

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(item.message for item in self._results)

    @property
    def statuses(self) -> tuple[tuple[CoverageQualityGate, QualityGateStatus], ...]:
        return tuple((item.gate, item.status) for item in self._results)

    def is_inactive(self) -> bool:
        return self.overall_status is QualityGateStatus.INACTIVE

    def is_successful(self) -> bool:
        return self.overall_status.is_successful()

    def to_dict(self) -> dict:
        return {
            "overallResult": self.overall_status.name,
            "resultItems": [item.to_dict() for item in self._results],
        }


class CoverageQualityGateEvaluator:
    """Evaluates quality gates against the statistics of a build.

    Gates are evaluated in the given order. Each gate adds one message to
    the result; the handler is notified whenever the overall status rises
    to WARNING or FAILED.
    """

    def __init__(self, quality_gates: Iterable[CoverageQualityGate], statistics: CoverageStatistics):
        self.quality_gates = list(quality_gates)
        self.statistics = statistics

    def is_enabled(self) -> bool:
        return len(self.quality_gates) > 0

    def evaluate(self, handler: ResultHandler, log: FilteredLog) -> QualityGateResult:
        """Evaluate all gates.

        Args:
            handler: Receives ``on_unstable``/``on_failure`` on escalation
            log: Receives one line per gate plus a summary

        Returns:
            QualityGateResult with the ordered per-gate outcomes
        """
        result = QualityGateResult()

        if not self.is_enabled():
            log.info(NO_QUALITY_GATES_MESSAGE)
            return result

        for gate in self.quality_gates:
            previous = result.overall_status
            item = self._evaluate_gate(gate, result)
            log.info(f"-> {item.message}")

            if result.overall_status.worse_than(previous):
                self._escalate(result.overall_status, item.message, handler)

        if result.is_inactive():
            log.info("-> None of the quality gates could be evaluated")
        elif result.is_successful():
            log.info(f"-> All quality gates have been passed (overall result: {result.overall_status.name})")
        else:
            log.info(f"-> Some quality gates have been missed: overall result is {result.overall_status.name}")

        return result

    def _evaluate_gate(self, gate: CoverageQualityGate, result: QualityGateResult) -> QualityGateResultItem:
        value = self.statistics.get_value(gate.baseline, gate.metric)
        if value is None:
            logger.debug("No value for %s, skipping gate", gate.name)
            return result.add(gate, QualityGateStatus.INACTIVE, NOT_AVAILABLE)

        if value.numeric >= gate.threshold:
            status = QualityGateStatus.PASSED
        else:
            status = gate.criticality.status
        return result.add(gate, status, FORMATTER.format_value(gate.baseline, value))

    @staticmethod
    def _escalate(status: QualityGateStatus, message: str, handler: ResultHandler) -> None:
        if status is QualityGateStatus.FAILED:
            handler.on_failure(message)
        elif status is QualityGateStatus.WARNING:
            handler.on_unstable(message)
