"""Batch endpoints: group suggestions and cross-page recommendations."""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from pagesense.models.group import GroupSuggestion
from pagesense.models.request import GroupRequest, RecommendationRequest
from pagesense.models.response import GroupResponse, RecommendationResponse
from pagesense.services.grouping import (
    detect_clusters,
    generate_cross_recommendations,
    merge_groups,
    rank_suggestions,
    suggest_by_content,
    suggest_by_domain,
    suggest_by_topic,
    suggest_groups_combined,
)
from pagesense.services.processor import validate_content_size

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()

# Defaults used when the request leaves the threshold unset
_CONTENT_THRESHOLD = 0.6
_COMBINED_THRESHOLD = 0.5


@router.post(
    "/groups",
    response_model=GroupResponse,
    summary="Suggest groups for a batch of pages",
    description=(
        "Groups pages by content similarity, link domain, first keyword, all three "
        "combined, or by agglomerative clustering.\n\n"
        "`page_ids`, when given, must have one entry per page; suggestions refer "
        "to pages by these ids (by position otherwise)."
    ),
)
@limiter.limit("10/minute")
def groups(request: Request, body: GroupRequest) -> GroupResponse:
    _check_pages(body.pages)
    logger.info(
        "Group request received",
        extra={"pages": len(body.pages), "strategy": body.strategy},
    )

    try:
        suggestions = _suggest(body)
    except ValueError as exc:
        logger.warning("Invalid group request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))

    if body.merge_threshold is not None:
        suggestions = rank_suggestions(merge_groups(suggestions, body.merge_threshold))

    return GroupResponse(
        strategy=body.strategy,
        pages_analyzed=len(body.pages),
        suggestions=suggestions,
    )


@router.post(
    "/recommendations",
    response_model=RecommendationResponse,
    summary="Recommend related page pairs",
)
@limiter.limit("10/minute")
def recommendations(request: Request, body: RecommendationRequest) -> RecommendationResponse:
    _check_pages(body.pages)
    logger.info(
        "Recommendation request received",
        extra={"pages": len(body.pages), "min_relevance": body.min_relevance},
    )

    try:
        results = generate_cross_recommendations(body.pages, body.min_relevance, body.page_ids)
    except ValueError as exc:
        logger.warning("Invalid recommendation request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))

    return RecommendationResponse(pages_analyzed=len(body.pages), recommendations=results)


def _suggest(body: GroupRequest) -> List[GroupSuggestion]:
    if body.strategy == "content":
        threshold = _CONTENT_THRESHOLD if body.threshold is None else body.threshold
        return suggest_by_content(body.pages, threshold, body.page_ids)
    if body.strategy == "domain":
        return suggest_by_domain(body.pages, body.page_ids)
    if body.strategy == "topic":
        return suggest_by_topic(body.pages, body.page_ids)
    if body.strategy == "clusters":
        return detect_clusters(body.pages, body.num_clusters, body.page_ids)
    threshold = _COMBINED_THRESHOLD if body.threshold is None else body.threshold
    return suggest_groups_combined(body.pages, threshold, body.page_ids)


def _check_pages(pages) -> None:
    try:
        for page in pages:
            validate_content_size(page)
    except ValueError as exc:
        logger.warning("Rejected oversized content: %s", exc)
        raise HTTPException(status_code=413, detail=str(exc))
