"""Metadata extractors: where the listener gets suite and test records from."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from .decorators import declared_metadata
from .models import MetadataRecord


class MetadataExtractor(Protocol):
    """Interface the listener queries for suite and test metadata."""

    def suite_metadata(self, suite: object) -> Sequence[MetadataRecord]:
        """Return the ordered records declared for a suite."""
        ...

    def test_metadata(self, test: object, name: str) -> Sequence[MetadataRecord]:
        """Return the ordered records declared for the test method ``name``."""
        ...


def suite_name(suite: object) -> str:
    """Derive a report name from a suite identity.

    Classes are named by their dotted path, objects with a string ``name``
    attribute by that name, anything else by ``str()``.
    """
    if isinstance(suite, type):
        return f"{suite.__module__}.{suite.__qualname__}"
    name = getattr(suite, "name", None)
    if isinstance(name, str):
        return name
    return str(suite)


class DecoratorMetadataExtractor:
    """Reads records stored by the ``allure_adapter.annotations`` decorators."""

    def suite_metadata(self, suite: object) -> Sequence[MetadataRecord]:
        cls = suite if isinstance(suite, type) else type(suite)
        return declared_metadata(cls)

    def test_metadata(self, test: object, name: str) -> Sequence[MetadataRecord]:
        method = getattr(type(test), name, None)
        if method is None:
            return []
        return declared_metadata(method)


class StaticMetadataExtractor:
    """Serves records from an explicit registry.

    Suites are keyed by ``suite_name(suite)`` and tests by method name.
    Useful for hosts that compute metadata ahead of time.
    """

    def __init__(
        self,
        suites: Mapping[str, Sequence[MetadataRecord]] | None = None,
        tests: Mapping[str, Sequence[MetadataRecord]] | None = None,
    ) -> None:
        self._suites = dict(suites or {})
        self._tests = dict(tests or {})

    def suite_metadata(self, suite: object) -> Sequence[MetadataRecord]:
        return list(self._suites.get(suite_name(suite), ()))

    def test_metadata(self, test: object, name: str) -> Sequence[MetadataRecord]:
        return list(self._tests.get(name, ()))
