from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from troubledocs.models.content import ContentRecord


class ContentCacheEntry(BaseModel):
    """Cached parse result for a single documentation page."""

    url: str
    record: ContentRecord
    fetched_at: datetime
    expires_at: datetime
    stale: bool = False
