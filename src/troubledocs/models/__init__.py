from __future__ import annotations

from troubledocs.models.cache import ContentCacheEntry
from troubledocs.models.content import (
    BreadcrumbItem,
    CloudProvider,
    CodeExample,
    ContentRecord,
    GuideType,
    Section,
    TroubleshootingCategory,
    TroubleshootingStep,
)
from troubledocs.models.tools import SearchDocsInput, SearchDocsOutput

__all__ = [
    # content
    "CloudProvider",
    "GuideType",
    "TroubleshootingCategory",
    "Section",
    "TroubleshootingStep",
    "CodeExample",
    "BreadcrumbItem",
    "ContentRecord",
    # cache
    "ContentCacheEntry",
    # tools
    "SearchDocsInput",
    "SearchDocsOutput",
]
