from typing import List, Optional

from kisan_saathi.models.market import MarketPrice


def filter_market(
    prices: List[MarketPrice],
    state: Optional[str] = None,
    query: Optional[str] = None,
) -> List[MarketPrice]:
    """
    Case-insensitive substring filter over market records.

    Args:
        prices: Records to filter, returned in their original order.
        state: Keep records whose state contains this text.
        query: Keep records whose commodity or market contains this text.

    Returns:
        The records matching every filter that was given. Empty or missing
        filters match everything.
    """
    filtered = prices

    if state:
        needle = state.lower()
        filtered = [p for p in filtered if needle in p.state.lower()]

    if query:
        needle = query.lower()
        filtered = [
            p
            for p in filtered
            if needle in p.commodity.lower() or needle in p.market.lower()
        ]

    return list(filtered)
