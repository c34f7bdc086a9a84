from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from kisan_saathi.models.advisory import Tip


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class PriceRange(BaseModel):
    """Price band for one commodity on one day. min <= modal <= max is not checked."""

    min: float
    max: float
    modal: float = Field(description="Most common (representative) price.")


class MarketPrice(BaseModel):
    model_config = ConfigDict(frozen=True)

    commodity: str
    variety: Optional[str] = None
    market: str
    state: str
    price: PriceRange
    unit: str
    date: date
    trend: Trend
    change: float = Field(description="Signed percentage change.")


class CommodityCategory(BaseModel):
    name: str
    commodities: List[str]


class PricePoint(BaseModel):
    date: date
    price: float


class MarketPricesResponse(BaseModel):
    prices: List[MarketPrice]
    insights: List[Tip]


class MarketAdviceRequest(BaseModel):
    state: Optional[str] = None
    query: Optional[str] = None
