"""Rule-based content-type classification.

:func:`classify_content_type` lower-cases the page title and the first
1000 characters of its text, then walks :data:`_RULES` in order and returns
the first type whose markers match.  Order matters: a title mentioning both
"video" and "shop" is a ``VIDEO`` page.

Content types
-------------
``VIDEO``
    Title names a video or a video platform.
``DOCUMENTATION``
    Title names docs or a manual, or the text talks about functions *and*
    parameters.
``SOCIAL_MEDIA``
    Title names a social network.
``SHOPPING``
    Title mentions buying or prices, or the text has cart/checkout wording.
``NEWS``
    Title says news/breaking/headline, or the text mentions a reporter.
``REFERENCE``
    Title names an encyclopedia, or the text has references *and* citations.
``ARTICLE``
    Everything else.
"""

from typing import Dict, NamedTuple, Tuple

from pagesense.models.page import PageContent
from pagesense.models.summary import CategoryInfo, ContentType
from pagesense.services.extractor import resolve_text

_SAMPLE_CHARS = 1000

CATEGORY_CONFIDENCE = 0.75


class _Rule(NamedTuple):
    content_type: ContentType
    title_any: Tuple[str, ...] = ()
    sample_any: Tuple[str, ...] = ()
    sample_all: Tuple[str, ...] = ()

    def matches(self, title: str, sample: str) -> bool:
        if any(marker in title for marker in self.title_any):
            return True
        if any(marker in sample for marker in self.sample_any):
            return True
        return bool(self.sample_all) and all(marker in sample for marker in self.sample_all)


_RULES: Tuple[_Rule, ...] = (
    _Rule(ContentType.VIDEO, title_any=("video", "watch", "youtube", "vimeo")),
    _Rule(
        ContentType.DOCUMENTATION,
        title_any=("documentation", "docs", "api reference", "manual"),
        sample_all=("function", "parameter"),
    ),
    _Rule(
        ContentType.SOCIAL_MEDIA,
        title_any=("twitter", "facebook", "instagram", "linkedin", "reddit"),
    ),
    _Rule(
        ContentType.SHOPPING,
        title_any=("buy", "shop", "cart", "price"),
        sample_any=("add to cart", "checkout"),
    ),
    _Rule(
        ContentType.NEWS,
        title_any=("news", "breaking", "headline"),
        sample_any=("reporter",),
    ),
    _Rule(
        ContentType.REFERENCE,
        title_any=("wikipedia", "encyclopedia"),
        sample_all=("references", "citation"),
    ),
)

# content type -> (primary category, secondary categories)
_CATEGORIES: Dict[ContentType, Tuple[str, Tuple[str, ...]]] = {
    ContentType.ARTICLE: ("Articles", ("Reading", "Information")),
    ContentType.VIDEO: ("Media", ("Video", "Entertainment")),
    ContentType.DOCUMENTATION: ("Documentation", ("Reference", "Technical")),
    ContentType.SOCIAL_MEDIA: ("Social", ("Social Media", "Communication")),
    ContentType.SHOPPING: ("Shopping", ("E-commerce", "Products")),
    ContentType.NEWS: ("News", ("Current Events", "Information")),
    ContentType.REFERENCE: ("Reference", ("Knowledge", "Information")),
    ContentType.OTHER: ("Other", ()),
}


def classify_content_type(content: PageContent) -> ContentType:
    """Return the single :class:`ContentType` that best describes *content*."""
    title = content.title.lower()
    sample = resolve_text(content)[:_SAMPLE_CHARS].lower()

    for rule in _RULES:
        if rule.matches(title, sample):
            return rule.content_type
    return ContentType.ARTICLE


def category_for(content_type: ContentType) -> CategoryInfo:
    primary, secondary = _CATEGORIES[content_type]
    return CategoryInfo(
        primary_category=primary,
        secondary_categories=list(secondary),
        confidence=CATEGORY_CONFIDENCE,
    )


def classify_content(content: PageContent) -> CategoryInfo:
    return category_for(classify_content_type(content))
