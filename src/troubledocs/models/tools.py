from __future__ import annotations

from pydantic import BaseModel, field_validator

from troubledocs.models.content import CloudProvider, ContentRecord, TroubleshootingCategory


class SearchDocsInput(BaseModel):
    query: str
    provider: CloudProvider = CloudProvider.AWS
    service: str | None = None
    category: TroubleshootingCategory | None = None
    max_results: int = 10

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query must not be empty")
        if len(v) > 500:
            raise ValueError("query must not exceed 500 characters")
        return v

    @field_validator("service")
    @classmethod
    def validate_service(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip().lower()
        return v or None

    @field_validator("max_results")
    @classmethod
    def validate_max_results(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_results must be >= 1")
        if v > 50:
            raise ValueError("max_results must not exceed 50")
        return v


class SearchDocsOutput(BaseModel):
    results: list[ContentRecord]
    total_results: int
    search_time_ms: int
    error: str | None = None
