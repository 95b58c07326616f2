"""Shared exceptions for the allure_adapter package."""

from __future__ import annotations

from pathlib import Path


class AllureAdapterError(Exception):
    """Base class for errors raised while building Allure reports."""


class SuiteStackUnderflowError(AllureAdapterError):
    """Raised when an event needs an open suite but none is on the stack.

    This happens when the host runner emits a suite end (or a test event)
    without a matching suite start.
    """

    def __init__(self, event: str) -> None:
        self.event = event
        super().__init__(f"Cannot handle '{event}': no test suite is currently open.")


class AttachmentError(AllureAdapterError):
    """Base class for attachment failures."""


class AttachmentNotFoundError(AttachmentError):
    """Raised when an attachment source is missing or has no usable type."""

    def __init__(self, path: Path | str, reason: str = "doesn't exist") -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Attachment {path} {reason}.")


class AttachmentCopyError(AttachmentError):
    """Raised when an attachment cannot be copied into the output directory."""

    def __init__(self, source: Path | str, destination: Path | str) -> None:
        self.source = Path(source)
        self.destination = Path(destination)
        super().__init__(f"Failed to copy attachment from {source} to {destination}.")


class ReportWriteError(AllureAdapterError):
    """Raised when a suite document cannot be written to disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Failed to write report file {path}.")
