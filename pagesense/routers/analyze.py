"""Per-page analysis endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from pagesense.models.analysis import ContentAnalysis
from pagesense.models.page import PageContent
from pagesense.models.request import AnalyzeRequest, HtmlRequest
from pagesense.models.response import KeywordsResponse
from pagesense.models.summary import CategoryInfo, ContentSummary
from pagesense.services.extractor import extract_page_content
from pagesense.services.processor import ContentProcessor, validate_content_size

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post(
    "/analyze",
    response_model=ContentAnalysis,
    summary="Run every analysis the current mode allows on one page",
)
@limiter.limit("30/minute")
def analyze(request: Request, body: AnalyzeRequest) -> ContentAnalysis:
    content = _checked(body.content)
    processor = _processor(request)
    logger.info(
        "Analyze request received",
        extra={"title": content.title, "mode": processor.get_processing_mode().value},
    )
    return processor.analyze_page(content)


@router.post("/summary", response_model=ContentSummary, summary="Summarize one page")
@limiter.limit("30/minute")
def summary(request: Request, body: AnalyzeRequest) -> ContentSummary:
    return _processor(request).generate_summary(_checked(body.content))


@router.post("/classify", response_model=CategoryInfo, summary="Classify one page")
@limiter.limit("30/minute")
def classify(request: Request, body: AnalyzeRequest) -> CategoryInfo:
    return _processor(request).classify_content(_checked(body.content))


@router.post("/keywords", response_model=KeywordsResponse, summary="Extract keywords from one page")
@limiter.limit("30/minute")
def keywords(request: Request, body: AnalyzeRequest) -> KeywordsResponse:
    return KeywordsResponse(keywords=_processor(request).extract_keywords(_checked(body.content)))


@router.post(
    "/extract-html",
    response_model=PageContent,
    summary="Build page content from raw HTML",
    description=(
        "Parses the HTML and returns its visible text, title, meta description, "
        "meta keywords, image sources and link targets."
    ),
)
@limiter.limit("30/minute")
def extract_html(request: Request, body: HtmlRequest) -> PageContent:
    _checked(PageContent(html=body.html))
    return extract_page_content(body.html)


def _processor(request: Request) -> ContentProcessor:
    return request.app.state.processor


def _checked(content: PageContent) -> PageContent:
    try:
        validate_content_size(content)
    except ValueError as exc:
        logger.warning("Rejected oversized content: %s", exc)
        raise HTTPException(status_code=413, detail=str(exc))
    return content
