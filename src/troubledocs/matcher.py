from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from troubledocs.models.content import ContentRecord, TroubleshootingCategory


def content_matches_query(
    record: ContentRecord,
    query: str,
    category: TroubleshootingCategory | None = None,
) -> bool:
    """Case-insensitive substring match on title, description or any keyword.

    A category filter that differs from the record's category rejects it
    outright. No tokenisation or ranking.
    """
    if category is not None and record.category != category:
        return False

    query_lower = query.lower()
    if query_lower in record.title.lower():
        return True
    if query_lower in record.description.lower():
        return True
    return any(query_lower in keyword.lower() for keyword in record.keywords)
