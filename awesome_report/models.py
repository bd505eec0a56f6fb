"""
Report model for awesome-report.

Every type here is immutable once built. Attribute names are snake_case;
``to_dict`` produces the camelCase layout of reports.json.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


PASSED = "passed"
FAILED = "failed"
PENDING = "pending"


@dataclass(frozen=True)
class TestError:
    """Error payload attached to a failed test."""
    __test__ = False

    message: str
    stack: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "stack": self.stack}


@dataclass(frozen=True)
class CleanTestResult:
    """Serializable projection of a single test."""
    title: str
    full_title: str
    duration: int
    state: str  # "passed", "failed" or "pending"
    code: str = ""
    err: Optional[TestError] = None

    @property
    def passed(self) -> bool:
        return self.state == PASSED

    @property
    def failed(self) -> bool:
        return self.state == FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "fullTitle": self.full_title,
            "duration": self.duration,
            "state": self.state,
            "pass": self.passed,
            "fail": self.failed,
            "code": self.code,
            "err": self.err.to_dict() if self.err else None,
        }


@dataclass(frozen=True)
class CleanSuite:
    """Serializable projection of a suite and everything nested in it."""
    uuid: str
    title: str
    file: str
    full_file: str
    suites: Tuple["CleanSuite", ...] = ()
    tests: Tuple[CleanTestResult, ...] = ()

    @property
    def passes(self) -> Tuple[CleanTestResult, ...]:
        return tuple(test for test in self.tests if test.state == PASSED)

    @property
    def failures(self) -> Tuple[CleanTestResult, ...]:
        return tuple(test for test in self.tests if test.state == FAILED)

    @property
    def total_tests(self) -> int:
        return len(self.tests)

    @property
    def total_passes(self) -> int:
        return len(self.passes)

    @property
    def total_failures(self) -> int:
        return len(self.failures)

    def walk(self):
        """Yield this suite followed by every descendant, depth first."""
        yield self
        for child in self.suites:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uuid": self.uuid,
            "title": self.title,
            "file": self.file,
            "fullFile": self.full_file,
            "suites": [suite.to_dict() for suite in self.suites],
            "tests": [test.to_dict() for test in self.tests],
            "passes": [test.to_dict() for test in self.passes],
            "failures": [test.to_dict() for test in self.failures],
            "totalTests": self.total_tests,
            "totalPasses": self.total_passes,
            "totalFailures": self.total_failures,
        }


@dataclass(frozen=True)
class ReportStats:
    """Run-wide statistics, with the bootstrap test already removed."""
    suites: int
    tests: int
    passes: int
    pending: int
    failures: int
    start: Optional[str]
    end: Optional[str]
    duration: int
    pass_percent: Optional[float]
    percent_class: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suites": self.suites,
            "tests": self.tests,
            "passes": self.passes,
            "pending": self.pending,
            "failures": self.failures,
            "start": self.start,
            "end": self.end,
            "duration": self.duration,
            "passPercent": self.pass_percent,
            "percentClass": self.percent_class,
        }


@dataclass(frozen=True)
class ReportDocument:
    """The complete result of one test run."""
    report_title: str
    stats: ReportStats
    suites: Tuple[CleanSuite, ...]
    tests: Tuple[CleanTestResult, ...]
    passes: Tuple[CleanTestResult, ...]
    failures: Tuple[CleanTestResult, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reportTitle": self.report_title,
            "stats": self.stats.to_dict(),
            "suites": [suite.to_dict() for suite in self.suites],
            "tests": [test.to_dict() for test in self.tests],
            "passes": [test.to_dict() for test in self.passes],
            "failures": [test.to_dict() for test in self.failures],
        }
