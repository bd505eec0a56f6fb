"""
Report assembly for awesome-report.

Combines the normalized suite tree, the engine's run statistics and the flat
test lists into a single ReportDocument.
"""

import math
import os
from datetime import datetime
from typing import Any, Optional, Tuple

from .config_parser import ReporterConfig
from .event_collector import CollectedRun
from .models import ReportDocument, ReportStats
from .result_normalizer import clean_tests, normalize_suites


DANGER = "danger"
WARNING = "warning"
SUCCESS = "success"


def pass_percentage(passes: int, tests: int) -> Optional[float]:
    """
    Percentage of passing tests, rounded half-up to one decimal place.

    Returns None when no tests ran.
    """
    if tests <= 0:
        return None
    return math.floor(passes / tests * 1000 + 0.5) / 10


def percent_class(percent: Optional[float]) -> str:
    """Classify a pass percentage as danger, warning or success."""
    # a run without tests has no percentage and is not flagged
    if percent is None:
        return SUCCESS
    if percent <= 50:
        return DANGER
    if percent < 80:
        return WARNING
    return SUCCESS


def report_title(cwd: Optional[str] = None) -> str:
    """Name of the directory the run was started from."""
    cwd = cwd or os.getcwd()
    return os.path.basename(os.path.normpath(cwd))


def _timestamp(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def adjust_stats(stats: Any, bootstrap_tests: int = 1) -> Tuple[int, int]:
    """
    Remove the harness bootstrap test from the engine's counters.

    Args:
        stats: Engine statistics with ``tests`` and ``passes``
        bootstrap_tests: Number of bootstrap tests the harness injected

    Returns:
        (tests, passes) after the adjustment
    """
    tests = max(int(stats.tests) - bootstrap_tests, 0)
    passes = max(int(stats.passes) - bootstrap_tests, 0)
    return tests, passes


def build_stats(stats: Any, bootstrap_tests: int = 1) -> ReportStats:
    tests, passes = adjust_stats(stats, bootstrap_tests)
    percent = pass_percentage(passes, tests)

    return ReportStats(
        suites=int(getattr(stats, "suites", 0) or 0),
        tests=tests,
        passes=passes,
        pending=int(getattr(stats, "pending", 0) or 0),
        failures=int(getattr(stats, "failures", 0) or 0),
        start=_timestamp(getattr(stats, "start", None)),
        end=_timestamp(getattr(stats, "end", None)),
        duration=int(getattr(stats, "duration", 0) or 0),
        pass_percent=percent,
        percent_class=percent_class(percent),
    )


def assemble_report(
    run: CollectedRun,
    config: Optional[ReporterConfig] = None,
    cwd: Optional[str] = None,
) -> ReportDocument:
    """
    Build the ReportDocument for a finished run.

    Args:
        run: Events buffered by the EventCollector
        config: Reporter configuration (defaults when None)
        cwd: Working directory used for the title and suite file paths

    Returns:
        The immutable report document
    """
    config = config or ReporterConfig()
    cwd = cwd or os.getcwd()
    sentinel = config.sentinel_title

    return ReportDocument(
        report_title=report_title(cwd),
        stats=build_stats(run.stats, config.bootstrap_tests),
        suites=normalize_suites(run.root_suite, sentinel, cwd),
        tests=clean_tests(run.tests, sentinel),
        passes=clean_tests(run.passes, sentinel),
        failures=clean_tests(run.failures, sentinel),
    )
