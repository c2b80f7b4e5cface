"""Tests for pagesense.services.classifier."""

import pytest

from pagesense.models.page import PageContent
from pagesense.models.summary import ContentType
from pagesense.services.classifier import (
    CATEGORY_CONFIDENCE,
    category_for,
    classify_content,
    classify_content_type,
)


def _page(title: str = "", text: str = "") -> PageContent:
    return PageContent(title=title, text=text)


# ---------------------------------------------------------------------------
# Title rules
# ---------------------------------------------------------------------------

class TestTitleRules:
    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Breaking News: Market Crashes", ContentType.NEWS),
            ("Watch our latest trailer", ContentType.VIDEO),
            ("Python Documentation", ContentType.DOCUMENTATION),
            ("Reddit - front page", ContentType.SOCIAL_MEDIA),
            ("Best price on laptops", ContentType.SHOPPING),
            ("Alan Turing - Wikipedia", ContentType.REFERENCE),
        ],
    )
    def test_title_markers(self, title, expected):
        assert classify_content_type(_page(title=title)) == expected

    def test_title_is_case_insensitive(self):
        assert classify_content_type(_page(title="YOUTUBE")) == ContentType.VIDEO

    def test_first_matching_rule_wins(self):
        assert classify_content_type(_page(title="Shop video deals")) == ContentType.VIDEO


# ---------------------------------------------------------------------------
# Text rules
# ---------------------------------------------------------------------------

class TestTextRules:
    def test_documentation_needs_function_and_parameter(self):
        page = _page(title="Guide", text="This function takes one parameter.")
        assert classify_content_type(page) == ContentType.DOCUMENTATION

    def test_function_alone_is_not_documentation(self):
        page = _page(title="Guide", text="This function is useful.")
        assert classify_content_type(page) == ContentType.ARTICLE

    def test_shopping_text(self):
        page = _page(title="Laptops", text="Great deals. Add to cart now.")
        assert classify_content_type(page) == ContentType.SHOPPING

    def test_news_text(self):
        page = _page(title="Today", text="Our reporter was on the scene.")
        assert classify_content_type(page) == ContentType.NEWS

    def test_reference_text(self):
        page = _page(title="Turing", text="See references. Citation needed.")
        assert classify_content_type(page) == ContentType.REFERENCE

    def test_only_text_sample_is_inspected(self):
        page = _page(title="Story", text="x" * 1000 + " reporter")
        assert classify_content_type(page) == ContentType.ARTICLE

    def test_html_used_when_text_missing(self):
        page = PageContent(html="<p>Our reporter says hello</p>")
        assert classify_content_type(page) == ContentType.NEWS

    def test_default_is_article(self):
        assert classify_content_type(_page(title="My trip", text="We went hiking.")) == ContentType.ARTICLE

    def test_empty_page_is_article(self):
        assert classify_content_type(PageContent()) == ContentType.ARTICLE


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class TestCategories:
    def test_news_category(self):
        category = classify_content(_page(title="Breaking News: Market Crashes"))
        assert category.primary_category == "News"
        assert category.secondary_categories == ["Current Events", "Information"]
        assert category.confidence == CATEGORY_CONFIDENCE

    def test_article_category(self):
        category = category_for(ContentType.ARTICLE)
        assert category.primary_category == "Articles"
        assert category.secondary_categories == ["Reading", "Information"]

    def test_other_has_no_secondaries(self):
        category = category_for(ContentType.OTHER)
        assert category.primary_category == "Other"
        assert category.secondary_categories == []

    @pytest.mark.parametrize("content_type", list(ContentType))
    def test_every_type_has_a_category(self, content_type):
        assert category_for(content_type).primary_category


class TestTotality:
    @pytest.mark.parametrize(
        "page",
        [
            PageContent(),
            PageContent(html="<<<not html"),
            PageContent(title="Breaking News: Market Crashes", text="..."),
            PageContent(text="这是一个中文句子"),
        ],
    )
    def test_deterministic_single_type(self, page):
        first = classify_content_type(page)
        assert isinstance(first, ContentType)
        assert classify_content_type(page) == first
