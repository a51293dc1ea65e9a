"""Code example extraction from ``<pre>`` and ``<code>`` elements."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4 import Tag

from troubledocs.extract.markup import strip_tags
from troubledocs.models.content import CodeExample

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bs4 import PageElement

_LANG_PREFIX = "lang-"

_LANGUAGE_ALIASES = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "rb": "ruby",
    "yml": "yaml",
    "md": "markdown",
    "sh": "bash",
    "shell": "bash",
}

_MIN_PRE_LENGTH = 5
_MIN_INLINE_LENGTH = 20


def map_language(lang: str | None) -> str:
    if not lang:
        return "text"
    return _LANGUAGE_ALIASES.get(lang.lower(), lang)


def detect_language(code: str) -> str:
    """Guess a language from content. Rules are checked in order, first hit wins."""
    if "aws " in code or "boto3" in code or "import boto" in code:
        return "python"
    if "AWS." in code or "aws-sdk" in code:
        return "javascript"
    if "#!/bin/bash" in code or "curl " in code:
        return "bash"
    if "{" in code and "}" in code and '"' in code:
        return "json"
    if "Version:" in code and "Statement:" in code:
        return "json"  # YAML-ish IAM policy
    return "text"



def _pre_language(pre: Tag) -> str | None:
    for token in pre.get("class") or []:
        if token.startswith(_LANG_PREFIX) and len(token) > len(_LANG_PREFIX):
            return token[len(_LANG_PREFIX) :]
    return None


def extract_code_examples(root: Tag) -> list[CodeExample]:
    """Collect every ``<pre>`` block and every substantial ``<code>`` element under *root*.

    The two passes are independent: code inside ``<pre><code>`` shows up once
    from each pass.
    """
    examples: list[CodeExample] = []

    for pre in root.find_all("pre"):
        code = strip_tags(pre.descendants)
        if len(code) <= _MIN_PRE_LENGTH:
            continue
        language = _pre_language(pre)
        examples.append(
            CodeExample(
                language=map_language(language),
                code=code,
                description=f"Code example in {language or 'text'}",
            )
        )

    for element in root.find_all("code"):
        code = strip_tags(element.descendants)
        if len(code) <= _MIN_INLINE_LENGTH:
            continue
        examples.append(
            CodeExample(
                language=detect_language(code),
                code=code,
                description="Inline code snippet",
            )
        )

    return examples


def first_code_block(elements: Iterable[PageElement]) -> CodeExample | None:
    """Return the first ``<code>`` (preferred) or ``<pre>`` snippet among *elements*.

    *elements* is a document-order run of nodes, such as ``li.descendants``.
    If a ``<code>`` element exists but is too short, ``<pre>`` is not
    consulted.
    """
    code_tag: Tag | None = None
    pre_tag: Tag | None = None
    for element in elements:
        if not isinstance(element, Tag):
            continue
        if element.name == "code":
            code_tag = element
            break
        if element.name == "pre" and pre_tag is None:
            pre_tag = element

    block = code_tag if code_tag is not None else pre_tag
    if block is None:
        return None
    code = strip_tags(block.descendants)
    if len(code) <= _MIN_PRE_LENGTH:
        return None
    return CodeExample(
        language=detect_language(code),
        code=code,
        description="Code snippet from troubleshooting step",
    )
