"""
pytest adapter for awesome-report.

Enable with ``pytest -p awesome_report.pytest_plugin``. The plugin plays the
role of the test engine: it mirrors the collected items as a suite hierarchy
(modules and classes become suites) and turns pytest's reports into the
"test end", "pass", "fail" and "end" events the reporter listens to.

Like the harness the report format was designed for, it runs a bootstrap
test ahead of the real ones; the reporter removes it from every count and
list.
"""

from typing import Any, Dict, List, Optional, Set

import pytest

from . import events
from .config_parser import BOOTSTRAP_TEST_TITLE, discover_config
from .events import EventEmitter, RunStats
from .models import TestError, PASSED, FAILED, PENDING
from .reporter import AwesomeReporter, initialize


class RawSuite:
    """Suite node mirroring a pytest Module or Class."""

    def __init__(self, title: str, file: Optional[str] = None, parent: Optional["RawSuite"] = None, root: bool = False):
        self.title = title
        self.file = file
        self.parent = parent
        self.root = root
        self.suites: List["RawSuite"] = []
        self.tests: List["RawTest"] = []

    def full_title(self) -> str:
        if self.parent is not None and self.parent.full_title():
            return f"{self.parent.full_title()} {self.title}"
        return self.title


class RawTest:
    """Test node mirroring a pytest item."""

    def __init__(self, title: str, parent: RawSuite, fn: Any = None):
        self.title = title
        self.parent = parent
        self.fn = fn
        self.duration = 0
        self.state: Optional[str] = None
        self.err: Optional[TestError] = None

    def full_title(self) -> str:
        return f"{self.parent.full_title()} {self.title}".strip()


def _prepping_tests():
    """Bootstrap test run before the first real test."""
    return None


def report_error(report: pytest.TestReport) -> TestError:
    """Extract message and stack from a failed report."""
    crash = getattr(report.longrepr, "reprcrash", None)
    stack = report.longreprtext
    if crash is not None:
        message = crash.message
    else:
        lines = stack.strip().splitlines()
        message = lines[-1] if lines else ""
    return TestError(message=message, stack=stack)


class PytestRunner(EventEmitter):
    """Translates pytest hooks into engine events."""

    def __init__(self, sentinel_title: str = BOOTSTRAP_TEST_TITLE):
        super().__init__()
        self.sentinel_title = sentinel_title
        self.suite = RawSuite("", root=True)
        self.stats = RunStats()
        self.stats.track(self)
        self.reporter: Optional[AwesomeReporter] = None
        self._tests: Dict[str, RawTest] = {}
        self._finished: Set[str] = set()

    def pytest_sessionstart(self, session):
        self.emit(events.START)

    def pytest_collection_finish(self, session):
        self.build_hierarchy(session.items)
        self.run_bootstrap()

    def pytest_runtest_logreport(self, report):
        test = self._tests.get(report.nodeid)
        if test is None or report.nodeid in self._finished:
            return
        if report.when == "call" or (report.when == "setup" and not report.passed):
            self.finish_test(test, report)

    def pytest_sessionfinish(self, session, exitstatus):
        self.emit(events.END)

    def build_hierarchy(self, items) -> None:
        suites: Dict[str, RawSuite] = {}
        for item in items:
            parent = self.suite
            for node in item.listchain():
                if not isinstance(node, (pytest.Module, pytest.Class)):
                    continue
                suite = suites.get(node.nodeid)
                if suite is None:
                    suite = RawSuite(node.name, file=str(node.path), parent=parent)
                    parent.suites.append(suite)
                    suites[node.nodeid] = suite
                    self.emit(events.SUITE, suite)
                parent = suite

            test = RawTest(item.name, parent, fn=getattr(item, "function", None))
            parent.tests.append(test)
            self._tests[item.nodeid] = test

    def run_bootstrap(self) -> None:
        test = RawTest(self.sentinel_title, self.suite, fn=_prepping_tests)
        test.state = PASSED
        self.suite.tests.insert(0, test)
        self.emit(events.PASS, test)
        self.emit(events.TEST_END, test)

    def finish_test(self, test: RawTest, report: pytest.TestReport) -> None:
        self._finished.add(report.nodeid)
        test.duration = int(report.duration * 1000)

        if report.passed:
            test.state = PASSED
            self.emit(events.PASS, test)
        elif report.failed:
            test.state = FAILED
            test.err = report_error(report)
            self.emit(events.FAIL, test)
        else:
            test.state = PENDING
            self.emit(events.PENDING, test)

        self.emit(events.TEST_END, test)


runner_key = pytest.StashKey[PytestRunner]()


def pytest_configure(config):
    # xdist workers report through the controller
    if hasattr(config, "workerinput"):
        return

    settings = discover_config(config.rootpath)
    context = initialize(settings)
    runner = PytestRunner(settings.sentinel_title)
    runner.reporter = AwesomeReporter(runner, context)
    config.stash[runner_key] = runner
    config.pluginmanager.register(runner, "awesome-report-runner")


def pytest_unconfigure(config):
    runner = config.stash.get(runner_key, None)
    if runner is not None:
        del config.stash[runner_key]
        config.pluginmanager.unregister(runner)
