"""Serializers turning a finished TestSuite into a report document.

Usage:
    from allure_adapter.serializers import ReportFormat, get_serializer

    serializer = get_serializer(ReportFormat.XML)
    document = serializer.serialize(suite)

Output is deterministic: test cases, attachments and labels keep their
insertion order and no timestamps or ids are generated here.
"""

from __future__ import annotations

import json
import re
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from enum import Enum

from .model import Description, Label, TestCase, TestSuite

ALLURE_NAMESPACE = "urn:model.allure.qatools.yandex.ru"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Characters outside the XML 1.0 Char production (ANSI escapes, NUL, ...).
_INVALID_XML_CHARS = re.compile(
    r"[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


class ReportFormat(Enum):
    """Document format of written suite reports."""

    XML = "xml"
    JSON = "json"


class SuiteSerializer(ABC):
    """Abstract base class for suite document serializers."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension of the documents this serializer produces."""

    @abstractmethod
    def serialize(self, suite: TestSuite) -> str:
        """Render ``suite`` as a self-contained document.

        Args:
            suite: A finished suite.

        Returns:
            The document text.
        """

    def file_name(self, unique_id: str) -> str:
        """Return the report file name for a generated id."""
        return f"{unique_id}-testsuite.{self.extension}"


class XmlSuiteSerializer(SuiteSerializer):
    """Allure 1 ``test-suite`` XML documents."""

    @property
    def extension(self) -> str:
        return "xml"

    def serialize(self, suite: TestSuite) -> str:
        attrs = {"xmlns:ns2": ALLURE_NAMESPACE, **_timestamps(suite.start, suite.stop)}
        root = ET.Element("ns2:test-suite", attrs)
        _text(root, "name", suite.name)
        _optional_text(root, "title", suite.title)
        _description(root, suite.description)

        test_cases = ET.SubElement(root, "test-cases")
        for test_case in suite.test_cases.values():
            self._test_case(test_cases, test_case)

        _labels(root, suite.labels)

        ET.indent(root)
        return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"

    def _test_case(self, parent: ET.Element, test_case: TestCase) -> None:
        attrs = _timestamps(test_case.start, test_case.stop)
        attrs["status"] = test_case.status.value
        attrs["severity"] = test_case.severity.value
        element = ET.SubElement(parent, "test-case", attrs)

        _text(element, "name", test_case.name)
        _optional_text(element, "title", test_case.title)
        _description(element, test_case.description)

        if test_case.failure is not None:
            failure = ET.SubElement(element, "failure")
            _text(failure, "message", test_case.failure.message)
            _text(failure, "stack-trace", test_case.failure.stack_trace)

        attachments = ET.SubElement(element, "attachments")
        for attachment in test_case.attachments:
            ET.SubElement(
                attachments,
                "attachment",
                {
                    "title": _xml_safe(attachment.title),
                    "source": _xml_safe(attachment.source),
                    "type": attachment.type.value,
                },
            )

        _labels(element, test_case.labels)


class JsonSuiteSerializer(SuiteSerializer):
    """JSON rendering of ``TestSuite.to_dict()``."""

    @property
    def extension(self) -> str:
        return "json"

    def serialize(self, suite: TestSuite) -> str:
        return json.dumps(suite.to_dict(), indent=2, ensure_ascii=False) + "\n"


_SERIALIZERS: dict[ReportFormat, type[SuiteSerializer]] = {
    ReportFormat.XML: XmlSuiteSerializer,
    ReportFormat.JSON: JsonSuiteSerializer,
}


def get_serializer(report_format: ReportFormat | str = ReportFormat.XML) -> SuiteSerializer:
    """Create the serializer for a report format.

    Raises:
        ValueError: If the format is unknown.
    """
    return _SERIALIZERS[ReportFormat(report_format)]()


def _timestamps(start: int, stop: int | None) -> dict[str, str]:
    attrs = {"start": str(start)}
    if stop is not None:
        attrs["stop"] = str(stop)
    return attrs


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = _xml_safe(value)
    return element


def _optional_text(parent: ET.Element, tag: str, value: str | None) -> None:
    if value is not None:
        _text(parent, tag, value)


def _description(parent: ET.Element, description: Description | None) -> None:
    if description is not None:
        element = _text(parent, "description", description.value)
        element.set("type", description.type.value)


def _labels(parent: ET.Element, labels: list[Label]) -> None:
    element = ET.SubElement(parent, "labels")
    for label in labels:
        attrs = {"name": label.name.value, "value": _xml_safe(label.value)}
        ET.SubElement(element, "label", attrs)


def _xml_safe(value: str) -> str:
    """Drop characters that cannot appear in an XML 1.0 document."""
    return _INVALID_XML_CHARS.sub("", value)
