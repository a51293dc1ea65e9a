"""Parser for AWS documentation HTML pages."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlparse

import structlog

from troubledocs.extract import (
    clean_text,
    elements_after,
    extract_code_examples,
    extract_main_content,
    extract_troubleshooting_steps,
    heading_level,
    make_soup,
)
from troubledocs.extract.markup import HEADING_TAGS
from troubledocs.models.content import (
    CloudProvider,
    ContentRecord,
    GuideType,
    Section,
    TroubleshootingCategory,
)

if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

log = structlog.get_logger()

DEFAULT_TITLE = "AWS Documentation"
_TITLE_SUFFIXES = (" - Amazon Web Services", " - AWS Documentation")

# First path segment of docs.aws.amazon.com -> short service id
SERVICE_ALIASES: dict[str, str] = {
    "IAM": "iam",
    "AmazonS3": "s3",
    "lambda": "lambda",
    "apigateway": "api-gateway",
    "AmazonCloudWatch": "cloudwatch",
    "AWSEC2": "ec2",
    "AmazonRDS": "rds",
    "amazondynamodb": "dynamodb",
}

_GUIDE_TYPES: dict[str, GuideType] = {
    "userguide": GuideType.USER_GUIDE,
    "dg": GuideType.DEVELOPER_GUIDE,
    "developerguide": GuideType.DEVELOPER_GUIDE,
    "apireference": GuideType.API_REFERENCE,
    "generalreference": GuideType.GENERAL_REFERENCE,
}

# Checked in order against the lower-cased URL and title; first hit wins.
_CATEGORY_RULES: tuple[tuple[TroubleshootingCategory, str, str], ...] = (
    (TroubleshootingCategory.ACCESS_DENIED, "access-denied", "access denied"),
    (TroubleshootingCategory.PERMISSIONS, "permission", "permission"),
    (TroubleshootingCategory.AUTHENTICATION, "auth", "auth"),
    (TroubleshootingCategory.CONFIGURATION, "config", "config"),
)


def classify_category(url: str, title: str) -> TroubleshootingCategory:
    url_lower = url.lower()
    title_lower = title.lower()
    for category, url_marker, title_marker in _CATEGORY_RULES:
        if url_marker in url_lower or title_marker in title_lower:
            return category
    return TroubleshootingCategory.GENERAL


def resolve_service(url: str) -> str:
    """Map ``https://docs.aws.amazon.com/<Segment>/...`` to a short service id."""
    segments = [s for s in urlparse(url).path.split("/") if s]
    if not segments:
        return "aws"
    segment = segments[0]
    return SERVICE_ALIASES.get(segment, segment.lower())


def resolve_guide_type(url: str) -> GuideType:
    segments = [s.lower() for s in urlparse(url).path.split("/") if s]
    # /<Service>/latest/<guide>/page.html
    if len(segments) >= 3 and segments[1] == "latest":
        return _GUIDE_TYPES.get(segments[2], GuideType.USER_GUIDE)
    return GuideType.USER_GUIDE


class AwsDocumentParser:
    """Turns one fetched AWS documentation page into a ``ContentRecord``."""

    def parse(self, html: str, url: str) -> ContentRecord | None:
        """Parse *html* fetched from *url*.

        Each field is best-effort and falls back to an empty value. An
        unexpected exception aborts the whole parse and returns None.
        """
        try:
            soup = make_soup(html)
            title = self._extract_title(soup)
            description = self._extract_meta(soup, "description")
            keywords = [k.strip() for k in self._extract_meta(soup, "keywords").split(",")]
            main_content = extract_main_content(soup)

            return ContentRecord(
                title=title,
                service=resolve_service(url),
                provider=CloudProvider.AWS,
                guide_type=resolve_guide_type(url),
                url=url,
                description=description,
                keywords=[k for k in keywords if k],
                sections=self._extract_sections(main_content),
                troubleshooting_steps=extract_troubleshooting_steps(main_content),
                code_examples=extract_code_examples(main_content),
                category=classify_category(url, title),
            )
        except Exception:
            log.error("parse_error", url=url, exc_info=True)
            return None

    def _extract_title(self, soup: BeautifulSoup) -> str:
        if soup.title is None:
            return DEFAULT_TITLE
        title = soup.title.get_text()
        for suffix in _TITLE_SUFFIXES:
            title = title.replace(suffix, "")
        return title.strip() or DEFAULT_TITLE

    def _extract_meta(self, soup: BeautifulSoup, name: str) -> str:
        meta = soup.find("meta", attrs={"name": name})
        if meta is None:
            return ""
        return meta.get("content") or ""

    def _extract_sections(self, root: Tag) -> list[Section]:
        """One section per heading, holding text up to the next heading of equal or higher rank."""
        sections: list[Section] = []
        for heading in root.find_all(list(HEADING_TAGS)):
            text = clean_text(heading.descendants)
            if not text:
                continue
            level = heading_level(heading)
            sections.append(
                Section(
                    id=f"section-{len(sections)}",
                    heading=text,
                    content=clean_text(elements_after(heading, root, level)),
                    level=level,
                )
            )
        return sections
