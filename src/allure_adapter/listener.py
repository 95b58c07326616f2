"""Allure report builder driven by test lifecycle events.

The listener keeps a stack of open suites. The host runner reports suite
and test boundaries in strictly nested order; every event mutates the
report entities of the suite on top of the stack. When a suite ends and it
recorded at least one test case, it is serialized into its own document
in the output directory and dropped.

Usage:
    listener = AllureListener("allure-report", clean=True)
    listener.start_test_suite(CheckoutTests)
    listener.start_test(test)
    listener.add_failure(test, error)
    listener.end_test(test, 0.12)
    listener.end_test_suite(CheckoutTests)
"""

from __future__ import annotations

import re
import time
import traceback
import unittest
import uuid
from collections.abc import Callable
from pathlib import Path

from .annotations import models as meta
from .annotations.extractor import DecoratorMetadataExtractor, MetadataExtractor, suite_name
from .config import Settings, get_settings
from .core.exceptions import AttachmentNotFoundError, SuiteStackUnderflowError
from .logging import configure_default_logging, get_logger
from .model import (
    Attachment,
    AttachmentType,
    Description,
    Failure,
    Label,
    Status,
    TestCase,
    TestSuite,
)
from .serializers import ReportFormat, get_serializer
from .storage import DEFAULT_OUTPUT_DIRECTORY, ReportDirectory

Clock = Callable[[], int]
IdGenerator = Callable[[], str]

SUPPORTED_TEST_TYPES: tuple[type, ...] = (unittest.TestCase,)

# Keeps attachment copies inside the output directory.
_UNSAFE_FILE_NAME_CHARS = re.compile(r"[\\/\x00]")


def current_millis() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return round(time.time() * 1000)


def random_id() -> str:
    return str(uuid.uuid4())


def failure_from_exception(error: BaseException) -> Failure:
    """Build a Failure from an exception's message and formatted traceback."""
    stack_trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return Failure(message=str(error), stack_trace=stack_trace)


class AllureListener:
    """Builds Allure suite documents from test lifecycle events."""

    def __init__(
        self,
        output_directory: Path | str = DEFAULT_OUTPUT_DIRECTORY,
        clean: bool = False,
        *,
        extractor: MetadataExtractor | None = None,
        report_format: ReportFormat | str = ReportFormat.XML,
        clock: Clock = current_millis,
        id_generator: IdGenerator = random_id,
    ):
        """Initialize the listener and prepare the output directory.

        Args:
            output_directory: Where documents and attachment copies go.
            clean: Remove top-level files from a previous run first.
            extractor: Source of suite/test metadata. Defaults to the
                decorator-based extractor.
            report_format: Document format of written suites.
            clock: Returns the current time in epoch milliseconds.
            id_generator: Returns a unique token for generated file names.
        """
        configure_default_logging()
        self.directory = ReportDirectory(output_directory, clean=clean)
        self.extractor: MetadataExtractor = extractor or DecoratorMetadataExtractor()
        self.serializer = get_serializer(report_format)
        self._clock = clock
        self._new_id = id_generator
        self._suites: list[TestSuite] = []
        self._written: list[Path] = []
        self._logger = get_logger(__name__)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs) -> AllureListener:
        """Create a listener configured from ``Settings``.

        Keyword arguments are passed through and win over settings.
        """
        settings = settings or get_settings()
        kwargs.setdefault("report_format", settings.report_format)
        return cls(settings.output_directory, settings.clean_output, **kwargs)

    @property
    def output_directory(self) -> Path:
        return self.directory.path

    @property
    def depth(self) -> int:
        """Number of suites currently open."""
        return len(self._suites)

    @property
    def written_reports(self) -> list[Path]:
        """Paths of the suite documents written so far."""
        return self._written.copy()

    # =========================================================================
    # SUITE EVENTS
    # =========================================================================

    def start_test_suite(self, suite: object) -> None:
        """Open a new suite and push it on the stack."""
        test_suite = TestSuite(name=suite_name(suite), start=self._clock())
        for record in self.extractor.suite_metadata(suite):
            self._apply_metadata(test_suite, record)
        self._suites.append(test_suite)
        self._logger.debug("suite_started", suite=test_suite.name, depth=self.depth)

    def end_test_suite(self, suite: object) -> Path | None:
        """Close the innermost suite and write its document if it is not empty.

        Returns:
            Path of the written document, or None for an empty suite.

        Raises:
            SuiteStackUnderflowError: If no suite is open.
        """
        stop = self._clock()
        if not self._suites:
            raise SuiteStackUnderflowError("end_test_suite")
        test_suite = self._suites.pop()
        test_suite.finish(stop)

        if test_suite.size == 0:
            self._logger.debug("suite_report_skipped", suite=test_suite.name, reason="empty")
            return None

        document = self.serializer.serialize(test_suite)
        path = self.directory.write_report(self.serializer.file_name(self._new_id()), document)
        self._written.append(path)
        self._logger.info(
            "suite_report_written",
            suite=test_suite.name,
            test_cases=test_suite.size,
            path=str(path),
        )
        return path

    # =========================================================================
    # TEST EVENTS
    # =========================================================================

    def start_test(self, test: object) -> None:
        """Record a new test case in the current suite."""
        name = self._supported_test_name(test)
        if name is None:
            return

        test_case = TestCase(name=name, start=self._clock())
        for record in self.extractor.test_metadata(test, name):
            self._apply_metadata(test_case, record)

        suite = self._current_suite("start_test")
        if suite.add_test_case(test_case):
            self._logger.warning("duplicate_test_case", suite=suite.name, test=name)
        self._logger.debug("test_started", suite=suite.name, test=name)

    def end_test(self, test: object, elapsed: float = 0.0) -> None:
        """Stamp the stop time and copy declared attachments.

        Args:
            test: The finished test.
            elapsed: Elapsed seconds as reported by the host.

        Raises:
            AttachmentNotFoundError: If a declared attachment is missing or
                has no media type.
            AttachmentCopyError: If copying an attachment fails.
        """
        name = self._supported_test_name(test)
        if name is None:
            return

        stop = self._clock()
        test_case = self._current_suite("end_test").get_test_case(name)
        if test_case is None:
            return

        test_case.finish(stop)
        for record in self.extractor.test_metadata(test, name):
            match record:
                case meta.Attachment():
                    test_case.add_attachment(self._copy_attachment(record))

        self._logger.debug(
            "test_finished",
            test=name,
            status=test_case.status.value,
            elapsed=elapsed,
        )

    def add_error(self, test: object, error: BaseException, elapsed: float = 0.0) -> None:
        """A test raised an unexpected exception."""
        self._handle_unsuccessful("add_error", test, error, Status.BROKEN)

    def add_failure(self, test: object, error: BaseException, elapsed: float = 0.0) -> None:
        """A test assertion failed."""
        self._handle_unsuccessful("add_failure", test, error, Status.FAILED)

    def add_incomplete_test(
        self, test: object, error: BaseException, elapsed: float = 0.0
    ) -> None:
        """A test was marked incomplete; reported like an error."""
        self.add_error(test, error, elapsed)

    def add_risky_test(self, test: object, error: BaseException, elapsed: float = 0.0) -> None:
        """A test was flagged risky; reported like an error."""
        self.add_error(test, error, elapsed)

    def add_skipped_test(self, test: object, error: BaseException, elapsed: float = 0.0) -> None:
        """A test was skipped."""
        self._handle_unsuccessful("add_skipped_test", test, error, Status.SKIPPED)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _handle_unsuccessful(
        self, event: str, test: object, error: BaseException, status: Status
    ) -> None:
        name = self._supported_test_name(test)
        if name is None:
            return
        test_case = self._current_suite(event).get_test_case(name)
        if test_case is None:
            return
        test_case.mark(status, failure_from_exception(error))
        self._logger.debug("test_unsuccessful", test=name, status=status.value)

    def _current_suite(self, event: str) -> TestSuite:
        if not self._suites:
            raise SuiteStackUnderflowError(event)
        return self._suites[-1]

    def _supported_test_name(self, test: object) -> str | None:
        """Return the test method name, or None if the test is not supported."""
        if isinstance(test, SUPPORTED_TEST_TYPES):
            return test._testMethodName
        self._logger.warning(
            "unsupported_test_instance",
            test=str(test),
            reason="not a unittest.TestCase",
        )
        return None

    def _apply_metadata(self, target: TestSuite | TestCase, record: object) -> None:
        match record:
            case meta.Title(value=value):
                target.title = value
            case meta.Description(value=value, type=kind):
                target.description = Description(kind, value)
            case meta.Features(names=names):
                for feature in names:
                    target.add_label(Label.feature(feature))
            case meta.Stories(names=names):
                for story in names:
                    target.add_label(Label.story(story))
            case meta.Severity(level=level) if isinstance(target, TestCase):
                target.severity = level
            case meta.Step():
                pass  # reserved, steps are not reported yet
            case _:
                pass

    def _copy_attachment(self, record: meta.Attachment) -> Attachment:
        source = Path(record.path)
        if record.type is AttachmentType.OTHER:
            raise AttachmentNotFoundError(source, "has no declared media type")
        if not source.exists():
            raise AttachmentNotFoundError(source)

        safe_name = _UNSAFE_FILE_NAME_CHARS.sub("_", record.name)
        file_name = f"{self._new_id()}{safe_name}-attachment.{record.type.value}"
        self.directory.copy_attachment(source, file_name)
        self._logger.debug("attachment_copied", source=str(source), file=file_name)
        return Attachment(title=record.name, source=file_name, type=record.type)
