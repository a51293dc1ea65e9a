"""Troubleshooting step extraction.

Two heuristics cover the two ways AWS pages write procedures: numbered
``<ol>`` lists, and prose under a heading such as "Solution" or "Step 2".
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from troubledocs.extract.code import first_code_block
from troubledocs.extract.error_codes import extract_errors
from troubledocs.extract.markup import elements_after, strip_tags
from troubledocs.models.content import TroubleshootingStep

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bs4 import PageElement, Tag

_PROCEDURE_HEADINGS = ["h3", "h4", "h5", "h6"]
_PROCEDURE_KEYWORD_RE = re.compile(r"step|procedure|process|solution", re.IGNORECASE)

_MIN_ITEM_LENGTH = 10
_MIN_PROCEDURE_LENGTH = 20
_MAX_TITLE_LENGTH = 100
_MAX_PROCEDURE_LENGTH = 500

PROCEDURE_TITLE = "Troubleshooting Procedure"


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def _code_text(elements: Iterable[PageElement]) -> str | None:
    example = first_code_block(elements)
    return example.code if example else None


def _list_steps(root: Tag) -> list[TroubleshootingStep]:
    steps: list[TroubleshootingStep] = []
    for ordered_list in root.find_all("ol"):
        number = 1
        for item in ordered_list.find_all("li", recursive=False):
            text = strip_tags(item.descendants)
            if len(text) <= _MIN_ITEM_LENGTH:
                continue
            steps.append(
                TroubleshootingStep(
                    step=number,
                    title=_truncate(text, _MAX_TITLE_LENGTH),
                    description=text,
                    code_example=_code_text(item.descendants),
                    related_errors=extract_errors(text),
                )
            )
            number += 1
    return steps


def extract_troubleshooting_steps(root: Tag) -> list[TroubleshootingStep]:
    """Extract list-based steps followed by heading-based procedures.

    List steps are numbered per ``<ol>``. Procedure steps continue from the
    running total, so numbers may repeat across the two kinds.
    """
    steps = _list_steps(root)

    for heading in root.find_all(_PROCEDURE_HEADINGS):
        if not _PROCEDURE_KEYWORD_RE.search(heading.get_text()):
            continue
        content = elements_after(heading, root)
        text = strip_tags(content)
        if len(text) <= _MIN_PROCEDURE_LENGTH:
            continue
        steps.append(
            TroubleshootingStep(
                step=len(steps) + 1,
                title=PROCEDURE_TITLE,
                description=_truncate(text, _MAX_PROCEDURE_LENGTH),
                code_example=_code_text(content),
                related_errors=extract_errors(text),
            )
        )

    return steps
