"""
Builders for raw engine objects used across the tests.
"""

from awesome_report.config_parser import BOOTSTRAP_TEST_TITLE
from awesome_report.event_collector import CollectedRun
from awesome_report.events import EventEmitter, RunStats
from awesome_report.models import PASSED, FAILED
from awesome_report.pytest_plugin import RawSuite, RawTest


def sample_test_body():
    x = 1
    assert x == 1


def make_test(parent, title, state=PASSED, duration=5, err=None, fn=sample_test_body):
    test = RawTest(title, parent, fn=fn)
    test.state = state
    test.duration = duration
    test.err = err
    parent.tests.append(test)
    return test


def make_suite(parent, title, file=None):
    suite = RawSuite(title, file=file, parent=parent)
    parent.suites.append(suite)
    return suite


def make_root():
    return RawSuite("", root=True)


def add_bootstrap(root):
    test = RawTest(BOOTSTRAP_TEST_TITLE, root)
    test.state = PASSED
    root.tests.insert(0, test)
    return test


class FakeRunner(EventEmitter):
    """Runner that only emits what the test tells it to."""

    def __init__(self, root=None):
        super().__init__()
        self.suite = root or make_root()
        self.stats = RunStats()
        self.stats.track(self)

    def run_test(self, test):
        if test.state == PASSED:
            self.emit("pass", test)
        elif test.state == FAILED:
            self.emit("fail", test)
        else:
            self.emit("pending", test)
        self.emit("test end", test)


def all_raw_tests(root):
    """Every raw test below ``root``, root's own tests first, breadth first."""
    found = list(root.tests)
    queue = list(root.suites)
    while queue:
        suite = queue.pop(0)
        found.extend(suite.tests)
        queue.extend(suite.suites)
    return found


def collected_run(root, tests):
    """Build a CollectedRun the way the engine would have reported ``tests``."""
    stats = RunStats(
        suites=2,
        tests=len(tests),
        passes=sum(1 for test in tests if test.state == PASSED),
        failures=sum(1 for test in tests if test.state == FAILED),
        pending=sum(1 for test in tests if test.state not in (PASSED, FAILED)),
        duration=1234,
    )
    return CollectedRun(
        root_suite=root,
        stats=stats,
        tests=list(tests),
        passes=[test for test in tests if test.state == PASSED],
        failures=[test for test in tests if test.state == FAILED],
    )


def auth_run():
    """Bootstrap test at the root plus a nested "Auth" suite with 3 tests."""
    root = make_root()
    bootstrap = add_bootstrap(root)
    login = make_suite(root, "Login", file="/work/project/test_login.py")
    auth = make_suite(login, "Auth", file="/work/project/test_login.py")
    tests = [
        bootstrap,
        make_test(auth, "accepts valid password"),
        make_test(auth, "accepts valid token"),
        make_test(auth, "rejects expired token", state=FAILED),
    ]
    return collected_run(root, tests)
