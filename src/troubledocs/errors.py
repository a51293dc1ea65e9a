"""Error codes and the exception type raised inside troubledocs.

Only the fetcher and input validation raise ``TroubleDocsError``. The search
orchestrator absorbs these per candidate URL, so callers of ``search`` never
see them; they surface to the agent only as the JSON envelope built by
``TroubleDocsError.to_envelope``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    PAGE_FETCH_FAILED = "PAGE_FETCH_FAILED"
    URL_NOT_ALLOWED = "URL_NOT_ALLOWED"
    TOO_MANY_REDIRECTS = "TOO_MANY_REDIRECTS"


class TroubleDocsError(Exception):
    """Structured error carrying a machine-readable code.

    ``recoverable`` tells the caller whether retrying the same request later
    could succeed (network blips, 5xx) or not (404, bad input).
    """

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def to_envelope(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "recoverable": self.recoverable,
            }
        }
