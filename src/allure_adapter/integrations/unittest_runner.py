"""unittest integration: feeds ``TestResult`` callbacks into an AllureListener.

unittest has no suite start/end callbacks, so every test class is reported
as one suite. The suite is opened when the first test of a class starts and
closed when a test of another class starts or the run stops.

Usage:
    runner = AllureTestRunner(AllureListener("allure-report"))
    runner.run(unittest.defaultTestLoader.discover("tests"))
"""

from __future__ import annotations

import time
import unittest
from typing import TextIO

from allure_adapter.listener import AllureListener


class AllureTestResult(unittest.TextTestResult):
    """Text result that also records an Allure report."""

    def __init__(
        self,
        stream: TextIO,
        descriptions: bool,
        verbosity: int,
        *,
        listener: AllureListener,
        **kwargs,
    ):
        super().__init__(stream, descriptions, verbosity, **kwargs)
        self.listener = listener
        self._open_class: type | None = None
        self._started_at: dict[str, float] = {}

    def startTest(self, test: unittest.TestCase) -> None:
        super().startTest(test)
        self._enter_class(type(test))
        self._started_at[test.id()] = time.perf_counter()
        self.listener.start_test(test)

    def stopTest(self, test: unittest.TestCase) -> None:
        super().stopTest(test)
        started = self._started_at.pop(test.id(), None)
        elapsed = time.perf_counter() - started if started is not None else 0.0
        self.listener.end_test(test, elapsed)

    def stopTestRun(self) -> None:
        super().stopTestRun()
        self._enter_class(None)

    def addError(self, test, err) -> None:
        super().addError(test, err)
        self.listener.add_error(test, err[1])

    def addFailure(self, test, err) -> None:
        super().addFailure(test, err)
        self.listener.add_failure(test, err[1])

    def addSkip(self, test, reason: str) -> None:
        super().addSkip(test, reason)
        # Skipped subtests report the owning test case.
        owner = getattr(test, "test_case", test)
        self.listener.add_skipped_test(owner, unittest.SkipTest(reason))

    def addUnexpectedSuccess(self, test) -> None:
        super().addUnexpectedSuccess(test)
        self.listener.add_risky_test(
            test, AssertionError("Unexpected success of an expected failure.")
        )

    def addSubTest(self, test, subtest, err) -> None:
        super().addSubTest(test, subtest, err)
        if err is None:
            return
        if issubclass(err[0], test.failureException):
            self.listener.add_failure(test, err[1])
        else:
            self.listener.add_error(test, err[1])

    def _enter_class(self, cls: type | None) -> None:
        if cls is self._open_class:
            return
        if self._open_class is not None:
            self.listener.end_test_suite(self._open_class)
        self._open_class = cls
        if cls is not None:
            self.listener.start_test_suite(cls)


class AllureTestRunner(unittest.TextTestRunner):
    """TextTestRunner whose results are recorded by an AllureListener."""

    resultclass = AllureTestResult

    def __init__(self, listener: AllureListener, **kwargs):
        super().__init__(**kwargs)
        self.listener = listener

    def _makeResult(self) -> AllureTestResult:
        return self.resultclass(
            self.stream,
            self.descriptions,
            self.verbosity,
            listener=self.listener,
        )
