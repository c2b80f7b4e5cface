import re

from bs4 import BeautifulSoup, Comment, Tag

# Tags whose entire subtree is non-content (scripting, styling, templates)
_REMOVE_TAGS = {
    "script",
    "style",
    "noscript",
    "template",
}

# CSS classes / ids that indicate site chrome rather than page content
_NAVIGATION_KEYWORDS = {
    "nav",
    "navbar",
    "navigation",
    "menu",
    "breadcrumb",
    "sidebar",
    "side-bar",
    "site-header",
    "site-footer",
}

_WHITESPACE_RE = re.compile(r"\s+")


def is_navigation(tag: Tag) -> bool:
    """Return True when *tag* is a ``<nav>`` or its id/class suggests navigation."""
    if tag.name == "nav":
        return True
    if not tag.attrs:
        return False
    attrs_to_check = []
    if tag.get("id"):
        attrs_to_check.append(str(tag["id"]).lower())
    for cls in tag.get("class", []):
        attrs_to_check.append(cls.lower())

    return any(keyword in attr for attr in attrs_to_check for keyword in _NAVIGATION_KEYWORDS)


def parse(html: str) -> BeautifulSoup:
    """Parse *html* leniently; malformed markup never raises."""
    return BeautifulSoup(html or "", "lxml")


def sanitize(html: str) -> BeautifulSoup:
    """Parse *html* and drop script, style and comment content from the tree."""
    soup = parse(html)

    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()

    # Comments may hold conditional blocks or commented-out markup
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    return soup


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs (including non-breaking spaces) and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()
