"""
Competitor price lookups.

Each source turns a DeviceQuery into a search URL, fetches the page and reads
the first listed price out of the markup. The markup paths are an undocumented
contract with the third-party site, so every selector lives on the concrete
source class and nowhere else.

Lookups fail soft: any problem is logged with the stage it happened in and the
source reports None ("no price"), never an exception.
"""
import math
import re
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import quote, quote_plus

import httpx
from bs4 import BeautifulSoup

from phonevalue.core.config import settings
from phonevalue.core.logger import get_logger
from phonevalue.models.device import DeviceQuery

logger = get_logger(__name__)

NON_NUMERIC = re.compile(r"[^0-9.-]+")
# Leading number in the same shape parseFloat() accepts: "12.5.3" -> 12.5
LEADING_NUMBER = re.compile(r"^[-]?(\d+\.?\d*|\.\d+)")


def parse_price(text: Optional[str]) -> Optional[float]:
    """
    Strip currency symbols, thousands separators and anything else that is not
    a digit, decimal point or minus sign, then read the number that is left.

    "£1,234.56" -> 1234.56, "Out of stock" -> None
    """
    if not text:
        return None

    cleaned = NON_NUMERIC.sub("", text)
    match = LEADING_NUMBER.match(cleaned)
    if not match:
        return None

    price = float(match.group(0))
    if math.isnan(price) or math.isinf(price):
        return None
    return price


class PriceSource(ABC):
    """A competitor site: given query terms, return an optional price."""

    name: str = "source"

    def __init__(self, timeout: Optional[float] = None, user_agent: Optional[str] = None):
        self.timeout = settings.SCRAPE_TIMEOUT if timeout is None else timeout
        self.headers = {
            # Act like a real browser to avoid being blocked
            "User-Agent": user_agent or settings.USER_AGENT,
        }

    @abstractmethod
    def build_url(self, query: DeviceQuery) -> str:
        ...

    @abstractmethod
    def extract_price_text(self, soup: BeautifulSoup) -> Optional[str]:
        """Return the raw price text from the first result, or None if the markup is missing."""

    async def fetch_price(self, query: DeviceQuery) -> Optional[float]:
        url = self.build_url(query)
        logger.info(f"Scraping {self.name} URL: {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=self.headers, follow_redirects=True) as client:
                response = await client.get(url)
        except httpx.TimeoutException:
            logger.error(f"{self.name}: request timed out after {self.timeout}s")
            return None
        except httpx.HTTPError as e:
            logger.error(f"{self.name}: request failed: {e}")
            return None

        if not response.is_success:
            logger.error(f"{self.name} returned a non-200 status: {response.status_code}")
            return None

        try:
            soup = BeautifulSoup(response.text, "html.parser")
            price_text = self.extract_price_text(soup)
        except Exception as e:
            logger.error(f"{self.name}: could not read page markup: {e}")
            return None

        if not price_text:
            logger.warning(f"{self.name}: price element not found for query: {query.model_dump()}")
            return None

        price = parse_price(price_text)
        if price is None:
            logger.warning(f"{self.name}: could not parse price text {price_text!r}")
            return None

        if price <= 0:
            logger.warning(f"{self.name}: ignoring non-positive price {price} from {price_text!r}")
            return None

        logger.info(f"{self.name} found price: £{price}")
        return price


class CexPriceSource(PriceSource):
    """CeX (uk.webuy.com): graded marketplace, searched by model, storage and grade."""

    name = "CEX"
    RESULT_SELECTOR = ".product-box-container"
    PRICE_SELECTOR = ".sell-price .price"

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.base_url = base_url or settings.CEX_SEARCH_URL

    def build_url(self, query: DeviceQuery) -> str:
        # e.g. "iPhone 14 Pro 128GB Unlocked A"
        terms = f"{query.model} {query.storage}"
        if query.grade:
            terms = f"{terms} Unlocked {query.grade}"
        return f"{self.base_url}?stext={quote_plus(terms)}"

    def extract_price_text(self, soup: BeautifulSoup) -> Optional[str]:
        first_result = soup.select_one(self.RESULT_SELECTOR)
        if first_result is None:
            logger.info("CEX: no product box found in search results")
            return None

        price = first_result.select_one(self.PRICE_SELECTOR)
        if price is None:
            return None
        return price.get_text(strip=True)


class MusicMagpiePriceSource(PriceSource):
    """musicMagpie: resale site, searched by brand, model and storage."""

    name = "MusicMagpie"
    PRICE_SELECTOR = ".product-price-now"

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.base_url = base_url or settings.MUSIC_MAGPIE_SEARCH_URL

    def build_url(self, query: DeviceQuery) -> str:
        terms = f"{query.brand} {query.model} {query.storage}"
        return f"{self.base_url}?keyword={quote(terms)}"

    def extract_price_text(self, soup: BeautifulSoup) -> Optional[str]:
        price = soup.select_one(self.PRICE_SELECTOR)
        if price is None:
            return None
        return price.get_text(strip=True)
