"""Error identifier extraction from plain text."""

from __future__ import annotations

import re

# Applied in order; results keep first-seen order across all families.
_ERROR_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "Error: AccessDenied", "exception NoSuchBucket"
    re.compile(r"(?i:error|exception|failure)[\s:]*([A-Z][A-Za-z0-9_]*)"),
    # "HTTP 403 Forbidden" -> "403"
    re.compile(r"HTTP\s+(\d{3})\s+([A-Za-z\s]+)", re.IGNORECASE),
    re.compile(r"AccessDenied|Forbidden|Unauthorized|InvalidRequest|BadRequest", re.IGNORECASE),
    # INTERNAL_ERROR, THROTTLING_ERROR_CODE
    re.compile(r"\b[A-Z_][A-Z0-9_]*ERROR[A-Z0-9_]*\b"),
)


def extract_errors(text: str) -> list[str]:
    """Return error names and HTTP status codes mentioned in *text*.

    Duplicates are dropped by exact string comparison, so ``AccessDenied`` and
    ``accessdenied`` are both kept if both appear.
    """
    errors: list[str] = []
    for pattern in _ERROR_PATTERNS:
        for match in pattern.finditer(text):
            error = (match.group(1) if match.lastindex else match.group(0)).strip()
            if error and error not in errors:
                errors.append(error)
    return errors
