import logging

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from pagesense.models.request import SimilarityRequest
from pagesense.models.response import SimilarityResponse
from pagesense.services.extractor import resolve_text
from pagesense.services.processor import ContentProcessor, validate_content_size
from pagesense.services.similarity import combined_similarity

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post("/similarity", response_model=SimilarityResponse, summary="Compare two pages")
@limiter.limit("30/minute")
def similarity(request: Request, body: SimilarityRequest) -> SimilarityResponse:
    """Score how alike two pages are.

    Returns the similarity of their generated summaries, the combined
    similarity of their full texts, and a keyword-aware relevance score.
    """
    try:
        validate_content_size(body.a)
        validate_content_size(body.b)
    except ValueError as exc:
        logger.warning("Rejected oversized content: %s", exc)
        raise HTTPException(status_code=413, detail=str(exc))

    processor: ContentProcessor = request.app.state.processor
    summary_a = processor.generate_summary(body.a)
    summary_b = processor.generate_summary(body.b)
    return SimilarityResponse(
        summary_similarity=processor.calculate_similarity(summary_a, summary_b),
        text_similarity=combined_similarity(resolve_text(body.a), resolve_text(body.b)),
        relevance=processor.calculate_content_relevance(body.a, body.b),
    )
