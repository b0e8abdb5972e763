"""Append-only log of a single evaluation run."""

import logging

from coveragegate.constants import DEFAULT_MAX_LOG_ERRORS

logger = logging.getLogger(__name__)


class FilteredLog:
    """Collects info and error messages in append order.

    Messages are also forwarded to the ``logging`` module. Only the first
    ``max_errors`` error lines are kept; the rest are counted and summarized
    when ``error_messages`` is read.
    """

    def __init__(self, title: str = "Errors", max_errors: int = DEFAULT_MAX_LOG_ERRORS):
        self.title = title
        self.max_errors = max_errors
        self._info: list[str] = []
        self._errors: list[str] = []
        self._skipped_errors = 0

    def info(self, message: str, *args) -> None:
        text = message % args if args else message
        self._info.append(text)
        logger.info(text)

    def error(self, message: str, *args) -> None:
        text = message % args if args else message
        logger.error(text)
        self._append_error(text)

    def exception(self, exc: BaseException, message: str, *args) -> None:
        """Log an error message followed by the exception text."""
        self.error(message, *args)
        self.error(f"{type(exc).__name__}: {exc}")

    @property
    def info_messages(self) -> list[str]:
        return list(self._info)

    @property
    def error_messages(self) -> list[str]:
        messages = list(self._errors)
        if self._skipped_errors:
            messages.append(
                f"  ... skipped logging of {self._skipped_errors} additional errors ..."
            )
        return messages

    def has_errors(self) -> bool:
        return bool(self._errors)

    def merge(self, other: "FilteredLog") -> None:
        """Append all messages of another log without forwarding them again."""
        self._info.extend(other._info)
        for text in other._errors[1:]:
            self._append_error(text)
        self._skipped_errors += other._skipped_errors

    def _append_error(self, text: str) -> None:
        if not self._errors:
            self._errors.append(self.title)
        if len(self._errors) > self.max_errors:
            self._skipped_errors += 1
        else:
            self._errors.append(text)
