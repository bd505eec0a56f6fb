"""
Test engine event contract.

A runner is anything with ``on(event, handler)``, a ``suite`` attribute
holding the root of the suite hierarchy, and a ``stats`` attribute. The
reporter only depends on that shape; ``EventEmitter`` and ``RunStats`` are
the implementations the pytest adapter uses.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional


START = "start"
SUITE = "suite"
TEST_END = "test end"
PASS = "pass"
FAIL = "fail"
PENDING = "pending"
END = "end"


class EventEmitter:
    """Minimal synchronous event emitter."""

    def __init__(self):
        self._handlers: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self._handlers[event].append(handler)

    def emit(self, event: str, *args: Any) -> None:
        for handler in list(self._handlers[event]):
            handler(*args)


@dataclass
class RunStats:
    """Counters kept by the engine while a run is in progress."""
    suites: int = 0
    tests: int = 0
    passes: int = 0
    pending: int = 0
    failures: int = 0
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    duration: int = 0  # milliseconds

    def track(self, runner: EventEmitter) -> None:
        """Keep these counters up to date from ``runner``'s events."""
        runner.on(START, self._on_start)
        runner.on(SUITE, self._on_suite)
        runner.on(TEST_END, self._on_test_end)
        runner.on(PASS, self._on_pass)
        runner.on(FAIL, self._on_fail)
        runner.on(PENDING, self._on_pending)
        runner.on(END, self._on_end)

    def _on_start(self) -> None:
        self.start = datetime.now(timezone.utc)

    def _on_suite(self, suite) -> None:
        if not getattr(suite, "root", False):
            self.suites += 1

    def _on_test_end(self, test) -> None:
        self.tests += 1

    def _on_pass(self, test) -> None:
        self.passes += 1

    def _on_fail(self, test) -> None:
        self.failures += 1

    def _on_pending(self, test) -> None:
        self.pending += 1

    def _on_end(self) -> None:
        self.end = datetime.now(timezone.utc)
        if self.start is not None:
            self.duration = int((self.end - self.start).total_seconds() * 1000)
