"""Helpers for capturing femtologging output in tests."""

from __future__ import annotations

import contextlib
import dataclasses
import threading
import time
import typing as typ

from femtologging import get_logger


@dataclasses.dataclass(slots=True)
class FemtoLogRecord:
    """Captured femtologging record for test assertions."""

    logger: str
    level: str
    message: str


class FemtoLogCapture:
    """Capture femtologging records via a Python handler."""

    def __init__(self) -> None:
        """Initialise storage and synchronization primitives."""
        self.records: list[FemtoLogRecord] = []
        self._condition = threading.Condition()

    def handle(self, logger: str, level: str, message: str) -> None:
        """Handle a log record from the femtologging worker thread."""
        with self._condition:
            self.records.append(
                FemtoLogRecord(logger=str(logger), level=str(level), message=message)
            )
            self._condition.notify_all()

    def wait_for_count(self, count: int, timeout: float = 1.0) -> None:
        """Wait until at least ``count`` records are captured."""
        deadline = time.monotonic() + timeout
        with self._condition:
            while len(self.records) < count:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self._condition.wait(timeout=remaining)

        assert len(self.records) >= count, (
            f"Expected {count} records, got {len(self.records)}"
        )


@contextlib.contextmanager
def capture_femto_logs(
    logger_name: str,
    *,
    level: str = "TRACE",
) -> typ.Iterator[FemtoLogCapture]:
    """Capture logs for the named femtologging logger."""
    logger = get_logger(logger_name)
    previous_level = logger.level
    previous_propagate = logger.propagate

    logger.set_level(level)
    logger.set_propagate(False)

    handler = FemtoLogCapture()
    logger.add_handler(handler)
    try:
        yield handler
    finally:
        logger.remove_handler(handler)
        logger.set_level(previous_level)
        logger.set_propagate(previous_propagate)
