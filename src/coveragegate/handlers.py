"""Result handlers that receive quality gate escalations."""

import logging
from enum import Enum
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ResultHandler(Protocol):
    """Receives a signal whenever the overall quality gate status escalates."""

    def on_unstable(self, message: str) -> None:
        ...

    def on_failure(self, message: str) -> None:
        ...


class NullResultHandler:
    """Ignores all signals, e.g. for dry runs."""

    def on_unstable(self, message: str) -> None:
        pass

    def on_failure(self, message: str) -> None:
        pass


class BuildResult(Enum):
    """Result of a build, ordered from best to worst."""

    SUCCESS = 0
    UNSTABLE = 1
    FAILURE = 2

    def is_worse_than(self, other: "BuildResult") -> bool:
        return self.value > other.value


class BuildStatusHandler:
    """Escalates a build result on quality gate violations.

    The result only ever gets worse: a FAILURE build stays FAILURE when a
    later signal reports UNSTABLE.
    """

    def __init__(self, result: BuildResult = BuildResult.SUCCESS):
        self.result = result
        self.messages: list[str] = []

    def on_unstable(self, message: str) -> None:
        self._escalate(BuildResult.UNSTABLE, message)

    def on_failure(self, message: str) -> None:
        self._escalate(BuildResult.FAILURE, message)

    def _escalate(self, result: BuildResult, message: str) -> None:
        self.messages.append(message)
        if result.is_worse_than(self.result):
            logger.warning("Setting build result to %s: %s", result.name, message)
            self.result = result
        else:
            logger.debug("Build result stays %s: %s", self.result.name, message)

    def is_successful(self) -> bool:
        return self.result is BuildResult.SUCCESS
