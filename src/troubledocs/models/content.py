from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class CloudProvider(StrEnum):
    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"


class GuideType(StrEnum):
    USER_GUIDE = "UserGuide"
    API_REFERENCE = "APIReference"
    DEVELOPER_GUIDE = "DeveloperGuide"
    GENERAL_REFERENCE = "GeneralReference"
    TROUBLESHOOTING = "Troubleshooting"


class TroubleshootingCategory(StrEnum):
    ACCESS_DENIED = "access-denied"
    CONFIGURATION = "configuration"
    PERMISSIONS = "permissions"
    AUTHENTICATION = "authentication"
    API_ERRORS = "api-errors"
    NETWORK = "network"
    PERFORMANCE = "performance"
    GENERAL = "general"


class Section(BaseModel):
    """One heading of a documentation page and the text beneath it."""

    model_config = ConfigDict(frozen=True)

    id: str  # "section-<index>", only unique within one parse
    heading: str
    content: str
    level: int = Field(ge=1, le=6)


class TroubleshootingStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: int  # 1-based, local to the extraction pass that produced it
    title: str
    description: str
    code_example: str | None = None
    related_errors: list[str] = []


class CodeExample(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: str
    code: str
    description: str
    filename: str | None = None


class BreadcrumbItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    url: str


class ContentRecord(BaseModel):
    """Structured form of one troubleshooting page. ``url`` is the cache key."""

    model_config = ConfigDict(frozen=True)

    title: str
    service: str
    provider: CloudProvider = CloudProvider.AWS
    guide_type: GuideType = GuideType.USER_GUIDE
    url: str
    description: str = ""
    keywords: list[str] = []
    sections: list[Section] = []
    troubleshooting_steps: list[TroubleshootingStep] = []
    code_examples: list[CodeExample] = []
    breadcrumbs: list[BreadcrumbItem] = []
    related_links: list[str] = []
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    category: TroubleshootingCategory = TroubleshootingCategory.GENERAL
