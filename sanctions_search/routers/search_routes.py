from fastapi import APIRouter, Depends, Request
import logging
import time

from ..core.config import settings
from ..schemas.search_schemas import (
    DirectSearchResponse,
    ErrorResponse,
    SearchRequest,
    SmartSearchResponse,
)
from ..services.sanctions import SanctionsOrchestrator
from ..utils.logging import activity_logger

router = APIRouter(tags=["Search"])
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorResponse, "description": "Translation or search engine failure"},
}


# Dependency to get the orchestrator
def get_sanctions_service(request: Request) -> SanctionsOrchestrator:
    # Clients are created once in the application lifespan
    state = request.app.state
    return SanctionsOrchestrator(state.search_client, state.translator, settings)


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 2)


@router.post(
    "/search",
    response_model=DirectSearchResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def direct_search(
    request: Request,
    body: SearchRequest,
    service: SanctionsOrchestrator = Depends(get_sanctions_service)
):
    """
    Search the watch-list index once with an optional type/country filter.
    """
    start_time = time.time()
    results = await service.direct_search(body)
    duration_ms = _elapsed_ms(start_time)

    logger.info(f"Direct search returned {len(results)} candidates in {duration_ms}ms")
    await activity_logger.log_search(
        "direct_search",
        getattr(request.state, "request_id", None),
        line_count=1 if body.q.strip() else 0,
        candidate_count=len(results),
        duration_ms=duration_ms,
    )
    return DirectSearchResponse(results=results)


@router.post(
    "/smart-search",
    response_model=SmartSearchResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def smart_search(
    request: Request,
    body: SearchRequest,
    service: SanctionsOrchestrator = Depends(get_sanctions_service)
):
    """
    Resolve each line of the query as an individual or entity name.

    filter.type is required. Individual names are translated and
    transliterated before searching; the request limit is ignored.
    """
    start_time = time.time()
    results = await service.smart_search(body)
    duration_ms = _elapsed_ms(start_time)

    failed_lines = sum(1 for group in results if group.error)
    if failed_lines:
        logger.warning(f"Smart search: {failed_lines} of {len(results)} lines had failed partitions")
    logger.info(f"Smart search resolved {len(results)} lines in {duration_ms}ms")
    await activity_logger.log_search(
        "smart_search",
        getattr(request.state, "request_id", None),
        line_count=len(results),
        candidate_count=sum(len(group.candidates) for group in results),
        failed_lines=failed_lines,
        duration_ms=duration_ms,
    )
    return SmartSearchResponse(results=results)
