"""Tree helpers shared by the extractors.

A page is parsed once with BeautifulSoup (lxml builder) and the extractors
walk the resulting tree. Text is read from plain strings only, so comments,
doctypes and script bodies never leak into extracted content.
"""

from __future__ import annotations

from itertools import islice
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, NavigableString, Tag

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from bs4 import PageElement

HEADING_TAGS: tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6")
_NON_CONTENT_TAGS = ["script", "style", "noscript"]


def make_soup(html: str) -> BeautifulSoup:
    """Parse *html* and drop script, style and noscript elements."""
    soup = BeautifulSoup(html, "lxml")
    for element in soup.find_all(_NON_CONTENT_TAGS):
        element.decompose()
    return soup


def _strings(elements: Iterable[PageElement]) -> Iterator[str]:
    return (str(element) for element in elements if type(element) is NavigableString)


def clean_text(elements: Iterable[PageElement]) -> str:
    """Text of *elements* with element boundaries as spaces and whitespace collapsed."""
    return " ".join(" ".join(_strings(elements)).split())


def strip_tags(elements: Iterable[PageElement]) -> str:
    """Text of *elements* concatenated without separators, trimmed."""
    return "".join(_strings(elements)).strip()


def clean_html(html: str) -> str:
    """Plain text of an HTML fragment. Never raises on malformed markup."""
    return clean_text(make_soup(html).descendants)


def extract_main_content(soup: BeautifulSoup) -> Tag:
    """Return ``<div id="main-content">``, or the whole document when absent."""
    main = soup.find("div", id="main-content")
    return main if isinstance(main, Tag) else soup


def heading_level(heading: Tag) -> int:
    return HEADING_TAGS.index(heading.name) + 1


def _end_of(root: Tag) -> PageElement | None:
    """First element after *root*'s subtree in document order."""
    node: PageElement | None = root
    while node is not None:
        if node.next_sibling is not None:
            return node.next_sibling
        node = node.parent
    return None


def elements_after(heading: Tag, root: Tag, max_level: int = 6) -> list[PageElement]:
    """Elements following *heading* in document order.

    Stops at the next heading of level ``max_level`` or higher rank, or at
    the end of *root*. The heading's own descendants are not included.
    """
    stop = HEADING_TAGS[:max_level]
    end = _end_of(root)
    following = islice(heading.next_elements, sum(1 for _ in heading.descendants), None)

    collected: list[PageElement] = []
    for element in following:
        if element is end or (isinstance(element, Tag) and element.name in stop):
            break
        collected.append(element)
    return collected
