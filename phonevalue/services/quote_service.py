import asyncio
from typing import Optional, Sequence, Tuple

from phonevalue.core.logger import get_logger
from phonevalue.models.device import DeviceQuery
from phonevalue.models.quote_request import DeviceCondition
from phonevalue.models.quote_response import QuoteResponse
from phonevalue.services.offer_service import (
    BonusSource,
    calculate_offer,
    draw_bonus,
    select_baseline,
)
from phonevalue.services.price_sources import PriceSource

logger = get_logger(__name__)

NO_OFFER_MESSAGE = "Sorry, we couldn't find a price for this model right now."


def as_response_price(price: Optional[float]) -> float:
    """Missing or non-positive prices go out as 0, the "unavailable" value clients expect."""
    return price if price is not None and price > 0 else 0.0


async def fetch_competitor_prices(
    query: DeviceQuery, sources: Sequence[PriceSource]
) -> Tuple[Optional[float], ...]:
    """
    Run every lookup at once and wait for all of them. Sources are expected to
    fail soft; anything that still escapes is re-raised once the others finish.
    """
    results = await asyncio.gather(
        *(source.fetch_price(query) for source in sources), return_exceptions=True
    )

    for source, result in zip(sources, results):
        if isinstance(result, BaseException):
            logger.error(f"{source.name} lookup raised unexpectedly: {result!r}")
            raise result

    return tuple(results)


async def build_quote(
    query: DeviceQuery,
    condition: Optional[DeviceCondition],
    sources: Tuple[PriceSource, PriceSource],
    bonus_source: BonusSource,
) -> QuoteResponse:
    cex_price, music_magpie_price = await fetch_competitor_prices(query, sources)
    cex_value = as_response_price(cex_price)
    music_magpie_value = as_response_price(music_magpie_price)
    logger.info(f"Scraped Prices -> CEX: £{cex_value}, MusicMagpie: £{music_magpie_value}")

    baseline = select_baseline((cex_price, music_magpie_price))
    if baseline is None:
        logger.info("No competitor prices found.")
        return QuoteResponse(
            ourPrice=0,
            cexPrice=cex_value,
            musicMagpiePrice=music_magpie_value,
            message=NO_OFFER_MESSAGE,
        )

    bonus = draw_bonus(bonus_source)
    offer = calculate_offer(baseline, condition, bonus)
    logger.info(f"Final Offer: £{offer} (baseline £{baseline}, bonus £{bonus})")

    return QuoteResponse(
        ourPrice=offer,
        cexPrice=cex_value,
        musicMagpiePrice=music_magpie_value,
    )
