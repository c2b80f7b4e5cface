"""Plain text and metadata extraction from raw page markup.

Every function accepts arbitrary (possibly malformed or empty) HTML and
degrades to an empty result instead of raising.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup

from pagesense.models.page import PageContent
from pagesense.services.sanitizer import collapse_whitespace, parse, sanitize

_DESCRIPTION_RE = re.compile(r"^description$", re.IGNORECASE)
_OG_DESCRIPTION_RE = re.compile(r"^og:description$", re.IGNORECASE)
_KEYWORDS_RE = re.compile(r"^keywords$", re.IGNORECASE)


def _meta_content(soup: BeautifulSoup, attr: str, pattern: re.Pattern) -> str:
    meta = soup.find("meta", attrs={attr: pattern})
    if meta and meta.get("content"):
        return str(meta["content"]).strip()
    return ""


def _text_of(soup: BeautifulSoup) -> str:
    # Separator keeps adjacent block elements from fusing into one word
    return collapse_whitespace(soup.get_text(separator=" "))


def extract_text(html: str) -> str:
    """Return the visible text of *html* as a single whitespace-collapsed line."""
    return _text_of(sanitize(html))


def extract_title(html: str) -> str:
    title_tag = parse(html).find("title")
    if title_tag:
        return collapse_whitespace(title_tag.get_text())
    return ""


def extract_description(html: str) -> Optional[str]:
    """Return the meta description, falling back to ``og:description``."""
    soup = parse(html)
    description = _meta_content(soup, "name", _DESCRIPTION_RE)
    if description:
        return description
    og_description = _meta_content(soup, "property", _OG_DESCRIPTION_RE)
    return og_description or None


def extract_meta_keywords(html: str) -> List[str]:
    raw = _meta_content(parse(html), "name", _KEYWORDS_RE)
    return [keyword.strip() for keyword in raw.split(",") if keyword.strip()]


def extract_links(html: str) -> List[str]:
    """Return every ``<a href>`` value in document order."""
    return [str(a["href"]).strip() for a in parse(html).find_all("a", href=True)]


def extract_images(html: str) -> List[str]:
    """Return every ``<img src>`` value in document order."""
    return [str(img["src"]).strip() for img in parse(html).find_all("img", src=True)]


def extract_page_content(html: str) -> PageContent:
    """Build a :class:`PageContent` with every field derived from *html*."""
    return PageContent(
        html=html,
        text=extract_text(html),
        title=extract_title(html),
        description=extract_description(html),
        keywords=extract_meta_keywords(html),
        images=extract_images(html),
        links=extract_links(html),
    )


def resolve_text(content: PageContent) -> str:
    """Return the page's plain text, extracting it from the markup when absent."""
    if content.text:
        return content.text
    if content.html:
        return extract_text(content.html)
    return ""
