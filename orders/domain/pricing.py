"""
Checkout pricing.

Prices come from settings so they can differ per deployment.
"""
from decimal import Decimal
from typing import Dict, Optional

from django.conf import settings

from core.domain.value_objects import require_tier


def tier_prices() -> Dict[str, Decimal]:
    return {tier: Decimal(str(price)) for tier, price in settings.TIER_PRICES.items()}


def addon_price() -> Decimal:
    return Decimal(str(settings.ADDON_PRICE))


def calculate_price(
    tier: str,
    include_addons: bool = False,
    prices: Optional[Dict[str, Decimal]] = None,
) -> Decimal:
    """
    Total price for a tier, plus the add-on when requested.

    Args:
        tier: Configured tier name
        include_addons: Whether the hardware add-on is included
        prices: Tier prices (defaults to settings.TIER_PRICES)

    Raises:
        InvalidTierError: If the tier has no configured price
    """
    prices = prices if prices is not None else tier_prices()
    require_tier(tier, prices.keys())
    total = prices[tier]
    if include_addons:
        total += addon_price()
    return total
