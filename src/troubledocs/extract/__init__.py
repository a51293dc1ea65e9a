from __future__ import annotations

from troubledocs.extract.code import (
    detect_language,
    extract_code_examples,
    first_code_block,
    map_language,
)
from troubledocs.extract.error_codes import extract_errors
from troubledocs.extract.markup import (
    clean_html,
    clean_text,
    elements_after,
    extract_main_content,
    heading_level,
    make_soup,
    strip_tags,
)
from troubledocs.extract.steps import extract_troubleshooting_steps

__all__ = [
    "make_soup",
    "clean_html",
    "clean_text",
    "strip_tags",
    "extract_main_content",
    "elements_after",
    "heading_level",
    "extract_errors",
    "extract_code_examples",
    "first_code_block",
    "map_language",
    "detect_language",
    "extract_troubleshooting_steps",
]
