"""
Buffering of engine events until the run finishes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List

from . import events


class LatchState(Enum):
    PENDING = "pending"
    FIRED = "fired"


class OneShotLatch:
    """Runs its action on the first ``fire()`` and ignores every later call."""

    def __init__(self, action: Callable[[], Any]):
        self._action = action
        self.state = LatchState.PENDING

    @property
    def fired(self) -> bool:
        return self.state is LatchState.FIRED

    def fire(self) -> bool:
        """Return True when this call ran the action."""
        if self.state is LatchState.FIRED:
            return False
        self.state = LatchState.FIRED
        self._action()
        return True


@dataclass
class CollectedRun:
    """Everything the engine handed over during one run."""
    root_suite: Any
    stats: Any
    tests: List[Any]
    passes: List[Any]
    failures: List[Any]


class EventCollector:
    """Subscribes to a runner and hands the buffered run to ``on_complete``.

    ``on_complete`` is called with a ``CollectedRun`` on the first "end"
    event. The engine may emit "end" more than once; the rest are ignored.
    """

    def __init__(self, runner, on_complete: Callable[[CollectedRun], Any]):
        self.runner = runner
        self.on_complete = on_complete
        self.tests: List[Any] = []
        self.passes: List[Any] = []
        self.failures: List[Any] = []
        self._latch = OneShotLatch(self._complete)

        runner.on(events.TEST_END, self.tests.append)
        runner.on(events.PASS, self.passes.append)
        runner.on(events.FAIL, self.failures.append)
        runner.on(events.END, self._latch.fire)

    @property
    def completed(self) -> bool:
        return self._latch.fired

    def snapshot(self) -> CollectedRun:
        return CollectedRun(
            root_suite=self.runner.suite,
            stats=self.runner.stats,
            tests=list(self.tests),
            passes=list(self.passes),
            failures=list(self.failures),
        )

    def _complete(self) -> None:
        self.on_complete(self.snapshot())
