from typing import Optional, Tuple
from fastapi import APIRouter, Depends, HTTPException
from phonevalue.core.exceptions import INTERNAL_ERROR_MESSAGE
from phonevalue.core.logger import get_logger
from phonevalue.models.device import DeviceQuery
from phonevalue.models.quote_request import DeviceCondition, QuoteRequestV1, QuoteRequestV2
from phonevalue.models.quote_response import ErrorResponse, QuoteResponse
from phonevalue.routes.deps import get_bonus_source, get_price_sources
from phonevalue.services.offer_service import BonusSource
from phonevalue.services.price_sources import PriceSource
from phonevalue.services.quote_service import build_quote

quote_router = APIRouter(prefix="/api", tags=["Quote"])

logger = get_logger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


async def _quote(
    query: DeviceQuery,
    condition: Optional[DeviceCondition],
    sources: Tuple[PriceSource, PriceSource],
    bonus_source: BonusSource,
) -> QuoteResponse:
    try:
        return await build_quote(query, condition, sources, bonus_source)
    except Exception as e:
        logger.exception(f"An unexpected error occurred while quoting {query.model_dump()}: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@quote_router.post(
    "/v1/get-quote",
    response_model=QuoteResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def get_quote_v1(
    payload: QuoteRequestV1,
    sources: Tuple[PriceSource, PriceSource] = Depends(get_price_sources),
    bonus_source: BonusSource = Depends(get_bonus_source),
):
    """Quote from an itemised condition report."""
    logger.info(f"Scraping for: {payload.brand} {payload.model} {payload.storage} ({payload.condition.model_dump()})")
    return await _quote(payload.to_query(), payload.condition, sources, bonus_source)


@quote_router.post(
    "/v2/get-quote",
    response_model=QuoteResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def get_quote_v2(
    payload: QuoteRequestV2,
    sources: Tuple[PriceSource, PriceSource] = Depends(get_price_sources),
    bonus_source: BonusSource = Depends(get_bonus_source),
):
    """Quote from a grade letter; the grade is already priced in by CeX's graded search."""
    logger.info(f"Scraping for: {payload.grade} Grade {payload.brand} {payload.model} {payload.storage}")
    return await _quote(payload.to_query(), None, sources, bonus_source)


# Unversioned path used by the existing web client, which sends a grade.
quote_router.add_api_route(
    "/get-quote",
    get_quote_v2,
    methods=["POST"],
    response_model=QuoteResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
