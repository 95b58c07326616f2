"""Report entities for Allure test-suite documents.

These are the in-memory objects the listener mutates while a suite is
running. They hold data, validate the few invariants a report has, and
convert themselves to plain dictionaries for the serializers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Status(Enum):
    """Final status of a test case."""

    PASSED = "passed"
    FAILED = "failed"
    BROKEN = "broken"
    SKIPPED = "skipped"
    CANCELED = "canceled"


class SeverityLevel(Enum):
    """Severity of a test case."""

    BLOCKER = "blocker"
    CRITICAL = "critical"
    NORMAL = "normal"
    MINOR = "minor"
    TRIVIAL = "trivial"


class DescriptionType(Enum):
    """Markup used by a description body."""

    TEXT = "text"
    MARKDOWN = "markdown"
    HTML = "html"


class AttachmentType(Enum):
    """Media type of an attachment.

    The value doubles as the extension of the copied file.
    """

    TXT = "txt"
    HTML = "html"
    XML = "xml"
    PNG = "png"
    JPG = "jpg"
    JSON = "json"
    CSV = "csv"
    OTHER = "other"  # unspecified, never accepted as an attachment


class LabelName(Enum):
    """Kinds of labels a report entity can carry."""

    FEATURE = "feature"
    STORY = "story"


@dataclass(frozen=True)
class Label:
    """A categorical tag used to group and filter report entries."""

    name: LabelName
    value: str

    @classmethod
    def feature(cls, value: str) -> Label:
        return cls(LabelName.FEATURE, value)

    @classmethod
    def story(cls, value: str) -> Label:
        return cls(LabelName.STORY, value)

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name.value, "value": self.value}


@dataclass(frozen=True)
class Description:
    """Free-form description of a suite or test case."""

    type: DescriptionType
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type.value, "value": self.value}


@dataclass
class Failure:
    """Why a test case did not pass."""

    message: str
    stack_trace: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "stack_trace": self.stack_trace}


@dataclass(frozen=True)
class Attachment:
    """A file attached to a test case.

    ``source`` is the file name of the copy inside the report output
    directory, so documents stay valid when the directory is moved.
    """

    title: str
    source: str
    type: AttachmentType

    def __post_init__(self) -> None:
        if self.type is AttachmentType.OTHER:
            raise ValueError(f"Attachment '{self.title}' has no declared media type.")

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "source": self.source, "type": self.type.value}


@dataclass
class TestCase:
    """A single test and its recorded outcome."""

    __test__ = False  # not a pytest test class

    name: str
    start: int
    stop: int | None = None
    title: str | None = None
    description: Description | None = None
    severity: SeverityLevel = SeverityLevel.NORMAL
    status: Status = Status.PASSED
    failure: Failure | None = None
    attachments: list[Attachment] = field(default_factory=list)
    labels: list[Label] = field(default_factory=list)

    def finish(self, stop: int) -> None:
        """Stamp the stop timestamp, never earlier than the start."""
        self.stop = max(self.start, stop)

    def add_label(self, label: Label) -> None:
        self.labels.append(label)

    def add_attachment(self, attachment: Attachment) -> None:
        self.attachments.append(attachment)

    def mark(self, status: Status, failure: Failure) -> None:
        """Record an unsuccessful outcome, replacing any previous one."""
        self.status = status
        self.failure = failure

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description.to_dict() if self.description else None,
            "severity": self.severity.value,
            "status": self.status.value,
            "start": self.start,
            "stop": self.stop,
            "failure": self.failure.to_dict() if self.failure else None,
            "attachments": [a.to_dict() for a in self.attachments],
            "labels": [label.to_dict() for label in self.labels],
        }


@dataclass
class TestSuite:
    """A named group of test cases, written out as one report document."""

    __test__ = False  # not a pytest test class

    name: str
    start: int
    stop: int | None = None
    title: str | None = None
    description: Description | None = None
    test_cases: dict[str, TestCase] = field(default_factory=dict)
    labels: list[Label] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.test_cases)

    @property
    def size(self) -> int:
        """Number of test cases recorded in this suite."""
        return len(self.test_cases)

    def finish(self, stop: int) -> None:
        """Stamp the stop timestamp, never earlier than the start.

        A clock stepped backwards yields a zero-length suite.
        """
        self.stop = max(self.start, stop)

    def add_label(self, label: Label) -> None:
        self.labels.append(label)

    def add_test_case(self, test_case: TestCase) -> bool:
        """Add a test case keyed by its name.

        A test case with the same name replaces the previous one and keeps
        its position.

        Returns:
            True if a previous test case was replaced.
        """
        replaced = test_case.name in self.test_cases
        self.test_cases[test_case.name] = test_case
        return replaced

    def get_test_case(self, name: str) -> TestCase | None:
        return self.test_cases.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description.to_dict() if self.description else None,
            "start": self.start,
            "stop": self.stop,
            "test_cases": [tc.to_dict() for tc in self.test_cases.values()],
            "labels": [label.to_dict() for label in self.labels],
        }
