import logging

from fastapi import APIRouter, Request

from pagesense.models.processing import ProcessingCapabilities
from pagesense.models.request import ModeRequest
from pagesense.models.response import ModeResponse
from pagesense.services.processor import ContentProcessor

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/mode", response_model=ModeResponse, summary="Current processing mode")
def get_mode(request: Request) -> ModeResponse:
    return ModeResponse(mode=_processor(request).get_processing_mode())


@router.put("/mode", response_model=ModeResponse, summary="Switch processing mode")
def set_mode(request: Request, body: ModeRequest) -> ModeResponse:
    """Switch the shared processor to *mode*.

    * ``"basic"`` – lead sentences only, no entity, sentiment or structure analysis.
    * ``"enhanced"`` – frequency-ranked summaries plus all insights.
    * ``"auto"`` – enhanced for ordinary pages, basic for very large ones.
    """
    processor = _processor(request)
    processor.set_processing_mode(body.mode)
    logger.info("Processing mode changed", extra={"mode": body.mode.value})
    return ModeResponse(mode=processor.get_processing_mode())


@router.get(
    "/capabilities",
    response_model=ProcessingCapabilities,
    summary="Features available under the current mode",
)
def capabilities(request: Request) -> ProcessingCapabilities:
    return _processor(request).get_current_capabilities()


def _processor(request: Request) -> ContentProcessor:
    return request.app.state.processor
