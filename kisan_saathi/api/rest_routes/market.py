from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from kisan_saathi.models.market import (
    CommodityCategory,
    MarketPricesResponse,
    PricePoint,
)
from kisan_saathi.services.market_advisory import advise_market
from kisan_saathi.services.market_filter import filter_market
from kisan_saathi.services.market_service import (
    MarketSource,
    get_commodity_categories,
    get_market_source,
    get_price_history,
    get_state_markets,
)

router = APIRouter(prefix="/market", tags=["Market"])


@router.get("/prices", response_model=MarketPricesResponse)
async def get_market_prices(
    state: Optional[str] = Query(None, description="State name, substring match"),
    query: Optional[str] = Query(
        None, description="Commodity or market name, substring match"
    ),
    source: MarketSource = Depends(get_market_source),
):
    """
    Get market prices filtered by state and search text, with insights
    computed over the filtered rows.
    """
    prices = filter_market(
        await source.get_market_prices(), state=state, query=query
    )
    return MarketPricesResponse(prices=prices, insights=advise_market(prices))


@router.get("/categories", response_model=List[CommodityCategory])
async def get_categories():
    return get_commodity_categories()


@router.get("/states/{state}/markets", response_model=List[str])
async def get_markets_for_state(state: str):
    """List the APMC markets known for a state."""
    return get_state_markets(state)


@router.get("/history/{commodity}", response_model=List[PricePoint])
async def get_commodity_price_history(
    commodity: str,
    days: int = Query(30, ge=1, le=365, description="Number of past days"),
):
    """Simulated daily price history for a commodity."""
    return get_price_history(commodity, days=days)
