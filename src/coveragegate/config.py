"""Recorder configuration: quality gate definitions loaded from YAML or dicts."""

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

import yaml

from coveragegate.constants import DEFAULT_RECORDER_ID, DEFAULT_RECORDER_NAME, DEFAULT_THRESHOLD
from coveragegate.model import Baseline, Metric
from coveragegate.quality_gates import CoverageQualityGate, QualityGateCriticality
from coveragegate.statistics import CoverageStatistics

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when gate definitions or statistics input cannot be used."""


@dataclass
class RecorderConfig:
    """Settings of one coverage recorder."""

    id: str = DEFAULT_RECORDER_ID
    name: str = DEFAULT_RECORDER_NAME
    quality_gates: list[CoverageQualityGate] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping) -> "RecorderConfig":
        """Create a config from a mapping with ``id``, ``name`` and ``qualityGates``.

        Raises:
            ConfigurationError: If a gate record is invalid
        """
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(data).__name__}")

        records = data.get("qualityGates", data.get("quality_gates")) or []
        if not isinstance(records, list):
            raise ConfigurationError("'qualityGates' must be a list of gate records")

        gates = [gate_from_dict(record, index) for index, record in enumerate(records, 1)]
        return cls(
            id=str(data.get("id", DEFAULT_RECORDER_ID)),
            name=str(data.get("name", DEFAULT_RECORDER_NAME)),
            quality_gates=gates,
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RecorderConfig":
        """Load config from a YAML file.

        The file may either hold the settings directly or below a top-level
        ``coverage`` key.
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        except (UnicodeDecodeError, OSError) as e:
            raise ConfigurationError(f"Cannot read {path}: {e}") from e

        if isinstance(data, Mapping):
            data = data.get("coverage", data)
        config = cls.from_dict(data)
        logger.debug("Loaded %d quality gates from %s", len(config.quality_gates), path)
        return config

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "qualityGates": [gate.to_dict() for gate in self.quality_gates],
        }


def gate_from_dict(record: Mapping, index: int = 1) -> CoverageQualityGate:
    """Validate one gate record and convert it into a quality gate.

    Args:
        record: Mapping with ``metric`` and optional ``baseline``,
            ``threshold`` and ``criticality``
        index: Position of the record, used in error messages

    Raises:
        ConfigurationError: If the record cannot be converted
    """
    if not isinstance(record, Mapping):
        raise ConfigurationError(f"Quality gate #{index}: expected a mapping, got {record!r}")
    if not record.get("metric"):
        raise ConfigurationError(f"Quality gate #{index}: 'metric' is required")

    try:
        metric = Metric.from_name(str(record["metric"]))
        baseline = Baseline.from_name(str(record.get("baseline", Baseline.PROJECT.name)))
        criticality = QualityGateCriticality.from_name(
            str(record.get("criticality", QualityGateCriticality.UNSTABLE.name))
        )
    except ValueError as e:
        raise ConfigurationError(f"Quality gate #{index}: {e}") from e

    threshold = _parse_threshold(record.get("threshold", DEFAULT_THRESHOLD), index)
    return CoverageQualityGate(metric=metric, baseline=baseline, threshold=threshold, criticality=criticality)


def parse_gate_option(option: str) -> CoverageQualityGate:
    """Parse the compact form ``METRIC[:BASELINE[:THRESHOLD[:CRITICALITY]]]``.

    Examples:
        ``LINE:PROJECT:80:FAILURE``, ``branch:modified-lines:60``, ``file``
    """
    parts = [part.strip() for part in option.split(":")]
    if len(parts) > 4 or not parts[0]:
        raise ConfigurationError(
            f"Invalid quality gate '{option}', expected METRIC[:BASELINE[:THRESHOLD[:CRITICALITY]]]"
        )

    record = {"metric": parts[0]}
    for key, part in zip(("baseline", "threshold", "criticality"), parts[1:]):
        if part:
            record[key] = part
    try:
        return gate_from_dict(record)
    except ConfigurationError as e:
        raise ConfigurationError(f"Invalid quality gate '{option}': {e}") from e


def load_statistics(path: Union[str, Path]) -> CoverageStatistics:
    """Load a statistics snapshot from a JSON file.

    Raises:
        ConfigurationError: If the file is not valid JSON or holds invalid values
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    except (UnicodeDecodeError, OSError) as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    try:
        return CoverageStatistics.from_dict(data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid statistics in {path}: {e}") from e


def _parse_threshold(raw, index: int) -> float:
    if isinstance(raw, bool):
        raise ConfigurationError(f"Quality gate #{index}: threshold must be a number, got {raw!r}")
    try:
        threshold = float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Quality gate #{index}: threshold must be a number, got {raw!r}"
        ) from None
    if not math.isfinite(threshold):
        raise ConfigurationError(f"Quality gate #{index}: threshold must be finite")
    return threshold
