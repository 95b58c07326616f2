"""Decorators that declare Allure metadata on test classes and methods.

Usage:
    from allure_adapter import annotations as allure

    @allure.title("Checkout")
    @allure.features("Payments")
    class CheckoutTests(unittest.TestCase):

        @allure.title("Pays with a card")
        @allure.severity("critical")
        @allure.attachment("receipt", "out/receipt.txt", "txt")
        def test_pays_with_card(self):
            ...

Records are stored on the decorated object in the order the decorators are
written (top to bottom).
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from allure_adapter.model import AttachmentType, DescriptionType, SeverityLevel

from .models import (
    Attachment,
    Description,
    Features,
    MetadataRecord,
    Severity,
    Step,
    Stories,
    Title,
)

METADATA_ATTRIBUTE = "__allure_metadata__"

T = TypeVar("T")


def declared_metadata(obj: object) -> list[MetadataRecord]:
    """Return the records declared directly on ``obj`` (not inherited)."""
    return list(getattr(obj, "__dict__", {}).get(METADATA_ATTRIBUTE, ()))


def _declare(record: MetadataRecord) -> Callable[[T], T]:
    def decorator(obj: T) -> T:
        records = obj.__dict__.get(METADATA_ATTRIBUTE)
        if records is None:
            records = []
            setattr(obj, METADATA_ATTRIBUTE, records)
        # Decorators apply bottom-up; prepend to keep source order.
        records.insert(0, record)
        return obj

    return decorator


def title(value: str) -> Callable[[T], T]:
    return _declare(Title(value))


def description(
    value: str,
    type: DescriptionType | str = DescriptionType.TEXT,
) -> Callable[[T], T]:
    return _declare(Description(value, DescriptionType(type)))


def features(*names: str) -> Callable[[T], T]:
    return _declare(Features(tuple(names)))


def stories(*names: str) -> Callable[[T], T]:
    return _declare(Stories(tuple(names)))


def severity(level: SeverityLevel | str) -> Callable[[T], T]:
    return _declare(Severity(SeverityLevel(level)))


def step(value: str = "") -> Callable[[T], T]:
    return _declare(Step(value))


def attachment(
    name: str,
    path: Path | str,
    type: AttachmentType | str = AttachmentType.OTHER,
) -> Callable[[T], T]:
    """Attach ``path`` to the test's report entry when the test ends."""
    return _declare(Attachment(name, Path(path), AttachmentType(type)))
