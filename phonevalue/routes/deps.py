import random
from typing import Tuple

from phonevalue.services.offer_service import BonusSource
from phonevalue.services.price_sources import (
    CexPriceSource,
    MusicMagpiePriceSource,
    PriceSource,
)


def get_price_sources() -> Tuple[PriceSource, PriceSource]:
    """CeX first, musicMagpie second; the response fields follow this order."""
    return CexPriceSource(), MusicMagpiePriceSource()


def get_bonus_source() -> BonusSource:
    return random.randint
