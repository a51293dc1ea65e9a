"""In-memory cache of parsed documentation pages, keyed by URL.

Entries live for ``ttl_hours`` and are never purged: a stale entry is simply
treated as a miss by ``get`` and overwritten by the next successful parse of
the same URL. The candidate URL set is small and fixed, so the dict is not
bounded.

All methods are synchronous and run on the event loop thread, so concurrent
writers of the same URL resolve to last-write-wins without a lock.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog

from troubledocs.models.cache import ContentCacheEntry

if TYPE_CHECKING:
    from troubledocs.models.content import ContentRecord

log = structlog.get_logger()

DEFAULT_TTL_HOURS = 12


class ContentCache:
    """Process-local TTL cache of ``ContentRecord``s."""

    def __init__(self, ttl_hours: float = DEFAULT_TTL_HOURS) -> None:
        self._ttl = timedelta(hours=ttl_hours)
        self._entries: dict[str, ContentCacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get_entry(self, url: str) -> ContentCacheEntry | None:
        """Read an entry including its freshness. Returns ``None`` on miss."""
        entry = self._entries.get(url)
        if entry is None:
            return None
        stale = datetime.now(UTC) >= entry.expires_at
        return entry.model_copy(update={"stale": stale})

    def get(self, url: str) -> ContentRecord | None:
        """Return the cached record for *url* if it is still fresh."""
        entry = self.get_entry(url)
        if entry is None:
            return None
        if entry.stale:
            log.debug("cache_stale", url=url, fetched_at=entry.fetched_at.isoformat())
            return None
        return entry.record

    def put(self, url: str, record: ContentRecord) -> None:
        now = datetime.now(UTC)
        self._entries[url] = ContentCacheEntry(
            url=url,
            record=record,
            fetched_at=now,
            expires_at=now + self._ttl,
        )
        log.debug("cache_write", url=url)
