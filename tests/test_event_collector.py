"""
Tests for event buffering and the run-completion latch.
"""

from awesome_report.event_collector import EventCollector, LatchState, OneShotLatch
from awesome_report.models import PASSED, FAILED, PENDING

from raw_objects import FakeRunner, make_suite, make_test


def test_latch_fires_once():
    calls = []
    latch = OneShotLatch(lambda: calls.append("ran"))

    assert latch.state is LatchState.PENDING
    assert latch.fire() is True
    assert latch.fire() is False
    assert latch.fire() is False

    assert calls == ["ran"]
    assert latch.state is LatchState.FIRED


def test_collector_buffers_events():
    runner = FakeRunner()
    suite = make_suite(runner.suite, "suite")
    runs = []
    collector = EventCollector(runner, runs.append)

    passing = make_test(suite, "passes", state=PASSED)
    failing = make_test(suite, "fails", state=FAILED)
    waiting = make_test(suite, "waits", state=PENDING)
    for test in (passing, failing, waiting):
        runner.run_test(test)

    assert collector.tests == [passing, failing, waiting]
    assert collector.passes == [passing]
    assert collector.failures == [failing]
    assert runs == []
    assert not collector.completed


def test_end_hands_over_the_run():
    runner = FakeRunner()
    suite = make_suite(runner.suite, "suite")
    runs = []
    EventCollector(runner, runs.append)

    test = make_test(suite, "passes")
    runner.run_test(test)
    runner.emit("end")

    (run,) = runs
    assert run.root_suite is runner.suite
    assert run.stats is runner.stats
    assert run.tests == [test]
    assert run.passes == [test]
    assert run.failures == []


def test_repeated_end_is_ignored():
    runner = FakeRunner()
    runs = []
    collector = EventCollector(runner, runs.append)

    runner.emit("end")
    runner.emit("end")
    runner.emit("end")

    assert len(runs) == 1
    assert collector.completed


def test_engine_stats_follow_events():
    runner = FakeRunner()
    suite = make_suite(runner.suite, "suite")
    runner.emit("start")
    runner.emit("suite", runner.suite)
    runner.emit("suite", suite)
    for state in (PASSED, PASSED, FAILED, PENDING):
        runner.run_test(make_test(suite, state, state=state))
    runner.emit("end")

    stats = runner.stats
    assert (stats.suites, stats.tests, stats.passes, stats.failures, stats.pending) == (1, 4, 2, 1, 1)
    assert stats.start is not None and stats.end >= stats.start
    assert stats.duration >= 0
