from typing import List

from kisan_saathi.models.advisory import Tip
from kisan_saathi.models.market import MarketPrice, Trend

SIGNIFICANT_CHANGE = 5

STABLE_MARKET_TIP = Tip(
    icon="📊",
    text="Market prices are relatively stable. Good time for planned transactions.",
)


def _format_change(change: float) -> str:
    # 8.7 -> "8.7", 12.0 -> "12"
    return f"{change:g}"


def advise_market(prices: List[MarketPrice]) -> List[Tip]:
    """One tip per strongly moving commodity, in input order; never empty."""
    tips: List[Tip] = []

    for price in prices:
        if price.trend == Trend.UP and price.change > SIGNIFICANT_CHANGE:
            tips.append(
                Tip(
                    icon="📈",
                    text=(
                        f"{price.commodity} prices are rising "
                        f"(+{_format_change(price.change)}%) - Good time to sell!"
                    ),
                )
            )
        elif price.trend == Trend.DOWN and price.change < -SIGNIFICANT_CHANGE:
            tips.append(
                Tip(
                    icon="📉",
                    text=(
                        f"{price.commodity} prices are falling "
                        f"({_format_change(price.change)}%) - Consider holding "
                        "or buying for future."
                    ),
                )
            )

    return tips or [STABLE_MARKET_TIP]
