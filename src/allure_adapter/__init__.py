"""allure_adapter - Allure test-suite reports from test lifecycle events."""

__version__ = "1.0.0"

from allure_adapter.core.exceptions import (
    AllureAdapterError,
    AttachmentCopyError,
    AttachmentError,
    AttachmentNotFoundError,
    ReportWriteError,
    SuiteStackUnderflowError,
)
from allure_adapter.listener import AllureListener
from allure_adapter.model import (
    Attachment,
    AttachmentType,
    Description,
    DescriptionType,
    Failure,
    Label,
    LabelName,
    SeverityLevel,
    Status,
    TestCase,
    TestSuite,
)

__all__ = [
    "AllureAdapterError",
    "AllureListener",
    "Attachment",
    "AttachmentCopyError",
    "AttachmentError",
    "AttachmentNotFoundError",
    "AttachmentType",
    "Description",
    "DescriptionType",
    "Failure",
    "Label",
    "LabelName",
    "ReportWriteError",
    "SeverityLevel",
    "Status",
    "SuiteStackUnderflowError",
    "TestCase",
    "TestSuite",
]
