"""Typed metadata records attached to suites and tests.

Each record is a small frozen dataclass. The listener consumes them as a
closed union (``MetadataRecord``) and dispatches with ``match``; anything
else an extractor returns is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from allure_adapter.model import AttachmentType, DescriptionType, SeverityLevel


@dataclass(frozen=True)
class Title:
    """Human-readable title overriding the suite or test name."""

    value: str


@dataclass(frozen=True)
class Description:
    """Description body and the markup it is written in."""

    value: str
    type: DescriptionType = DescriptionType.TEXT


@dataclass(frozen=True)
class Features:
    """Feature names; each becomes a ``feature`` label."""

    names: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Stories:
    """Story names; each becomes a ``story`` label."""

    names: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Severity:
    """Severity level of a test."""

    level: SeverityLevel = SeverityLevel.NORMAL


@dataclass(frozen=True)
class Step:
    """Step declaration. Recognized but not yet reflected in reports."""

    value: str = ""


@dataclass(frozen=True)
class Attachment:
    """A file to copy into the report once the test has finished."""

    name: str
    path: Path
    type: AttachmentType = AttachmentType.OTHER


MetadataRecord = Union[Title, Description, Features, Stories, Severity, Step, Attachment]
