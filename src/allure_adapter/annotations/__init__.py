"""Declarative test metadata: record types, decorators and extractors.

Usage:
    from allure_adapter import annotations as allure

    @allure.features("Payments")
    class CheckoutTests(unittest.TestCase):
        @allure.severity("critical")
        def test_pays_with_card(self): ...
"""

from .decorators import (
    attachment,
    declared_metadata,
    description,
    features,
    severity,
    step,
    stories,
    title,
)
from .extractor import (
    DecoratorMetadataExtractor,
    MetadataExtractor,
    StaticMetadataExtractor,
    suite_name,
)
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

__all__ = [
    "Attachment",
    "DecoratorMetadataExtractor",
    "Description",
    "Features",
    "MetadataExtractor",
    "MetadataRecord",
    "Severity",
    "StaticMetadataExtractor",
    "Step",
    "Stories",
    "Title",
    "attachment",
    "declared_metadata",
    "description",
    "features",
    "severity",
    "step",
    "stories",
    "suite_name",
    "title",
]
