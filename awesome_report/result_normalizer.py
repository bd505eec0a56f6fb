"""
Result normalization for awesome-report.

Turns the engine's live suite hierarchy into a tree of immutable
``CleanSuite`` objects. Only an allow-list of attributes is read from the
host objects, so parent pointers, callables and other engine internals never
reach the report. Host objects are never modified.
"""

import ast
import os
import textwrap
import traceback
import inspect
import uuid
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple

from .config_parser import BOOTSTRAP_TEST_TITLE
from .models import (
    CleanSuite,
    CleanTestResult,
    TestError,
    PASSED,
    FAILED,
    PENDING,
)


def clean_test(test: Any, sentinel_title: str = BOOTSTRAP_TEST_TITLE) -> Optional[CleanTestResult]:
    """
    Return a plain representation of ``test`` free of engine internals.

    Args:
        test: Raw test object from the engine
        sentinel_title: Title of the harness bootstrap test

    Returns:
        CleanTestResult, or None for the bootstrap test
    """
    if test.title == sentinel_title:
        return None

    state = test.state if test.state in (PASSED, FAILED) else PENDING
    full_title = test.full_title
    if callable(full_title):
        full_title = full_title()

    return CleanTestResult(
        title=test.title,
        full_title=full_title,
        duration=max(int(getattr(test, "duration", 0) or 0), 0),
        state=state,
        code=clean_source(getattr(test, "fn", None)),
        err=clean_error(getattr(test, "err", None)),
    )


def clean_tests(tests: Iterable[Any], sentinel_title: str = BOOTSTRAP_TEST_TITLE) -> Tuple[CleanTestResult, ...]:
    """Clean every test in ``tests``, dropping the bootstrap test."""
    cleaned = (clean_test(test, sentinel_title) for test in tests)
    return tuple(test for test in cleaned if test is not None)


def clean_error(err: Any) -> Optional[TestError]:
    """Project an engine error onto message and stack."""
    if err is None:
        return None
    if isinstance(err, TestError):
        return err
    if isinstance(err, BaseException):
        stack = "".join(traceback.format_exception(type(err), err, err.__traceback__))
        return TestError(message=str(err), stack=stack)
    if isinstance(err, dict):
        return TestError(message=str(err.get("message", "")), stack=str(err.get("stack", "") or ""))
    return TestError(
        message=str(getattr(err, "message", err)),
        stack=str(getattr(err, "stack", "") or ""),
    )


def clean_source(fn: Any) -> str:
    """
    Return the body of ``fn`` as display text.

    The ``def`` line and decorators are dropped, line endings are normalized
    and the body is dedented. Returns an empty string when the source is
    unavailable.
    """
    if fn is None:
        return ""
    try:
        source = inspect.getsource(fn)
    except (OSError, TypeError):
        return ""

    source = source.replace("\r\n", "\n").replace("\r", "\n").lstrip("\ufeff")
    source = textwrap.dedent(source).expandtabs(4)
    return _function_body(source).strip()


def _function_body(source: str) -> str:
    try:
        module = ast.parse(source)
    except SyntaxError:
        return source

    func = next(
        (node for node in module.body if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))),
        None,
    )
    if func is None or not func.body:
        return source

    lines = source.split("\n")
    first = func.body[0]
    if first.lineno == func.lineno:
        # one-liner such as "def test(): assert x"; col_offset counts UTF-8 bytes
        line = lines[first.lineno - 1].encode("utf-8")
        return line[first.col_offset:].decode("utf-8")
    return textwrap.dedent("\n".join(lines[first.lineno - 1:func.body[-1].end_lineno]))


def relative_file(path: Optional[str], cwd: Optional[str] = None) -> str:
    """Return ``path`` relative to ``cwd`` when it lies below it."""
    if not path:
        return ""
    cwd = os.path.abspath(cwd or os.getcwd())
    if not os.path.isabs(path):
        return path
    try:
        # different drives on Windows have no common path
        inside = os.path.commonpath([cwd, path]) == cwd
    except ValueError:
        return path
    return os.path.relpath(path, cwd) if inside else path


@dataclass
class _SuiteDraft:
    """A cleaned suite whose children are still being discovered."""
    uuid: str
    title: str
    file: str
    full_file: str
    tests: Tuple[CleanTestResult, ...]
    children: List["_SuiteDraft"] = field(default_factory=list)

    def freeze(self) -> CleanSuite:
        return CleanSuite(
            uuid=self.uuid,
            title=self.title,
            file=self.file,
            full_file=self.full_file,
            suites=tuple(child.freeze() for child in self.children),
            tests=self.tests,
        )


def _draft_suite(suite: Any, sentinel_title: str, cwd: Optional[str]) -> _SuiteDraft:
    full_file = getattr(suite, "file", None) or ""
    return _SuiteDraft(
        uuid=str(uuid.uuid4()),
        title=suite.title,
        file=relative_file(full_file, cwd),
        full_file=full_file,
        tests=clean_tests(getattr(suite, "tests", None) or (), sentinel_title),
    )


def normalize_suites(
    root: Any,
    sentinel_title: str = BOOTSTRAP_TEST_TITLE,
    cwd: Optional[str] = None,
) -> Tuple[CleanSuite, ...]:
    """
    Breadth-first walk of the raw hierarchy below ``root``.

    The root itself is not part of the result; its child suites are, in
    discovery order, each carrying its own cleaned tests and nested suites.

    Args:
        root: Root suite from the engine
        sentinel_title: Title of the harness bootstrap test
        cwd: Directory suite file paths are made relative to

    Returns:
        The cleaned children of ``root``
    """
    top_level: List[_SuiteDraft] = []
    seen = {id(root)}
    queue = deque((child, top_level) for child in getattr(root, "suites", None) or ())

    while queue:
        suite, siblings = queue.popleft()
        if id(suite) in seen:
            continue
        seen.add(id(suite))

        draft = _draft_suite(suite, sentinel_title, cwd)
        siblings.append(draft)
        queue.extend((child, draft.children) for child in getattr(suite, "suites", None) or ())

    return tuple(draft.freeze() for draft in top_level)
