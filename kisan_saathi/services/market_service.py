import logging
import random
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Protocol

import httpx
from pydantic import ValidationError

from kisan_saathi.core.config import settings
from kisan_saathi.models.market import (
    CommodityCategory,
    MarketPrice,
    PricePoint,
    PriceRange,
    Trend,
)
from kisan_saathi.services.market_filter import filter_market

logger = logging.getLogger(__name__)

AGMARKNET_URL = (
    "https://api.data.gov.in/resource/9ef84268-d588-465a-a308-a864a43d0070"
)

COMMODITY_CATEGORIES: List[CommodityCategory] = [
    CommodityCategory(
        name="Cereals",
        commodities=["Rice", "Wheat", "Maize", "Bajra", "Jowar", "Barley", "Ragi"],
    ),
    CommodityCategory(
        name="Pulses",
        commodities=["Arhar/Tur", "Moong", "Urad", "Chana", "Masur", "Rajma", "Cowpea"],
    ),
    CommodityCategory(
        name="Oilseeds",
        commodities=[
            "Groundnut", "Mustard", "Sunflower", "Soybean", "Sesame", "Safflower", "Niger",
        ],
    ),
    CommodityCategory(
        name="Spices",
        commodities=[
            "Turmeric", "Coriander", "Cumin", "Fenugreek", "Red Chilli", "Black Pepper",
            "Cardamom",
        ],
    ),
    CommodityCategory(
        name="Vegetables",
        commodities=[
            "Onion", "Potato", "Tomato", "Cauliflower", "Cabbage", "Brinjal", "Okra",
            "Bitter Gourd",
        ],
    ),
    CommodityCategory(
        name="Fruits",
        commodities=[
            "Apple", "Banana", "Orange", "Mango", "Grapes", "Pomegranate", "Papaya", "Guava",
        ],
    ),
]

STATE_MARKETS: Dict[str, List[str]] = {
    "Maharashtra": ["APMC Pune", "APMC Mumbai", "APMC Nashik", "APMC Aurangabad", "APMC Nagpur"],
    "Karnataka": ["APMC Bangalore", "APMC Mysore", "APMC Hubli", "APMC Belgaum"],
    "Madhya Pradesh": ["APMC Indore", "APMC Bhopal", "APMC Ujjain", "APMC Ratlam"],
    "Uttar Pradesh": ["APMC Lucknow", "APMC Kanpur", "APMC Agra", "APMC Meerut"],
    "Gujarat": ["APMC Ahmedabad", "APMC Surat", "APMC Rajkot", "APMC Vadodara"],
}

BASE_PRICES: Dict[str, float] = {
    "Rice": 3000,
    "Wheat": 2400,
    "Onion": 1750,
    "Turmeric": 9000,
    "Soybean": 4500,
    "Cotton": 6000,
    "Sugarcane": 300,
    "Tomato": 1000,
}
DEFAULT_BASE_PRICE = 2000.0

# (commodity, variety, market, state, min, max, modal, trend, change)
_MOCK_ROWS = [
    ("Rice", "Common", "APMC Pune", "Maharashtra", 2800, 3200, 3000, Trend.UP, 2.5),
    ("Wheat", "Lokvan", "APMC Delhi", "Delhi", 2200, 2600, 2400, Trend.STABLE, 0.1),
    ("Onion", "Red", "APMC Nashik", "Maharashtra", 1500, 2000, 1750, Trend.DOWN, -5.2),
    ("Turmeric", "Finger", "APMC Sangli", "Maharashtra", 8500, 9500, 9000, Trend.UP, 8.7),
    ("Soybean", "Yellow", "APMC Indore", "Madhya Pradesh", 4200, 4800, 4500, Trend.UP, 3.4),
    ("Cotton", "Medium Staple", "APMC Akola", "Maharashtra", 5800, 6200, 6000, Trend.STABLE, -0.8),
    ("Sugarcane", "Common", "APMC Kolhapur", "Maharashtra", 280, 320, 300, Trend.UP, 1.7),
    ("Tomato", "Local", "APMC Bangalore", "Karnataka", 800, 1200, 1000, Trend.DOWN, -12.5),
]


class MarketSource(Protocol):
    async def get_market_prices(
        self, state: Optional[str] = None, commodity: Optional[str] = None
    ) -> List[MarketPrice]: ...


def mock_market_data(on: Optional[date] = None) -> List[MarketPrice]:
    on = on or date.today()
    return [
        MarketPrice(
            commodity=commodity,
            variety=variety,
            market=market,
            state=state,
            price=PriceRange(min=low, max=high, modal=modal),
            unit="Quintal",
            date=on,
            trend=trend,
            change=change,
        )
        for commodity, variety, market, state, low, high, modal, trend, change in _MOCK_ROWS
    ]


def get_commodity_categories() -> List[CommodityCategory]:
    return COMMODITY_CATEGORIES


def get_state_markets(state: str) -> List[str]:
    return STATE_MARKETS.get(state, ["APMC Market"])


def get_base_price(commodity: str) -> float:
    return BASE_PRICES.get(commodity, DEFAULT_BASE_PRICE)


def get_price_history(
    commodity: str,
    days: int = 30,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> List[PricePoint]:
    """
    Simulated daily price history, oldest first, `days + 1` points ending today.

    Each point varies up to ±10% around the commodity's base price.
    """
    rng = rng or random.Random()
    today = today or date.today()
    base_price = get_base_price(commodity)

    history = []
    for offset in range(days, -1, -1):
        variation = (rng.random() - 0.5) * 0.2
        history.append(
            PricePoint(
                date=today - timedelta(days=offset),
                price=round(base_price * (1 + variation), 2),
            )
        )
    return history


class MockMarketSource:
    async def get_market_prices(
        self, state: Optional[str] = None, commodity: Optional[str] = None
    ) -> List[MarketPrice]:
        return filter_market(mock_market_data(), state=state, query=commodity)


def price_from_record(record: dict) -> MarketPrice:
    """
    Parses one Agmarknet record. The feed carries no trend, so live records
    are reported as stable with zero change.
    """
    arrival = datetime.strptime(record["arrival_date"], "%d/%m/%Y").date()
    return MarketPrice(
        commodity=record["commodity"],
        variety=record.get("variety") or None,
        market=record["market"],
        state=record["state"],
        price=PriceRange(
            min=float(record["min_price"]),
            max=float(record["max_price"]),
            modal=float(record["modal_price"]),
        ),
        unit="Quintal",
        date=arrival,
        trend=Trend.STABLE,
        change=0.0,
    )


class AgmarknetSource:
    """data.gov.in Agmarknet daily prices, falling back to mock data on failure."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        limit: int = 100,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.limit = limit
        self.transport = transport
        self.fallback = MockMarketSource()

    async def get_market_prices(
        self, state: Optional[str] = None, commodity: Optional[str] = None
    ) -> List[MarketPrice]:
        params = {"api-key": self.api_key, "format": "json", "limit": self.limit}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(AGMARKNET_URL, params=params)
                response.raise_for_status()
                records = response.json().get("records", [])
            prices = [price_from_record(record) for record in records]
        except httpx.HTTPError as e:
            logger.warning("Market price request failed (%s), using mock data", e)
            return await self.fallback.get_market_prices(state, commodity)
        except (ValidationError, ValueError, KeyError) as e:
            logger.warning("Unexpected market payload (%s), using mock data", e)
            return await self.fallback.get_market_prices(state, commodity)
        return filter_market(prices, state=state, query=commodity)


def get_market_source() -> MarketSource:
    if settings.MARKET_SOURCE == "live":
        if settings.DATA_GOV_API_KEY:
            return AgmarknetSource(
                api_key=settings.DATA_GOV_API_KEY,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            )
        logger.warning("MARKET_SOURCE=live but no data.gov.in key; using mock")
    return MockMarketSource()
