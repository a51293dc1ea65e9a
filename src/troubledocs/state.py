from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from troubledocs.cache import ContentCache
    from troubledocs.config import Settings
    from troubledocs.fetcher import Fetcher
    from troubledocs.search import CloudDocsSearcher


@dataclass
class AppState:
    """Long-lived objects shared by every tool call, built once in the server lifespan."""

    settings: Settings
    http_client: httpx.AsyncClient
    cache: ContentCache
    fetcher: Fetcher
    searcher: CloudDocsSearcher
