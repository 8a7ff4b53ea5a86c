"""Pricing configuration and price formatting."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CURRENCY = "SEK"
CURRENCY_SYMBOL = "kr"
DELIVERY_FEE = Decimal("50")
FREE_DELIVERY_THRESHOLD = Decimal("500")

_CENTS = Decimal("0.01")


def format_price(amount: Decimal | int | float, show_symbol: bool = False) -> str:
    """Format an amount with two decimals and the configured currency.

    Args:
        amount: The amount to format
        show_symbol: Use the currency symbol (kr) instead of the code (SEK)

    Returns:
        Formatted price string, e.g. "180.00 SEK"
    """
    return PricingPolicy().format_price(amount, show_symbol=show_symbol)


@dataclass(frozen=True)
class PricingPolicy:
    """Fixed pricing configuration consumed by the cart and the dispatcher.

    Attributes:
        delivery_fee: Fee charged when the subtotal is below the threshold
        free_delivery_threshold: Subtotal at or above which delivery is free
        currency: Currency code shown in formatted prices
        currency_symbol: Currency symbol shown when requested
    """

    delivery_fee: Decimal = DELIVERY_FEE
    free_delivery_threshold: Decimal = FREE_DELIVERY_THRESHOLD
    currency: str = CURRENCY
    currency_symbol: str = CURRENCY_SYMBOL

    def qualifies_for_free_delivery(self, subtotal: Decimal) -> bool:
        """Return True when the subtotal waives the delivery fee (inclusive)."""
        return subtotal >= self.free_delivery_threshold

    def delivery_fee_for(self, subtotal: Decimal) -> Decimal:
        """Delivery fee owed for the given subtotal."""
        if self.qualifies_for_free_delivery(subtotal):
            return Decimal("0")
        return self.delivery_fee

    def format_price(self, amount: Decimal | int | float, show_symbol: bool = False) -> str:
        """Format an amount using this policy's currency."""
        value = Decimal(str(amount)).quantize(_CENTS, rounding=ROUND_HALF_UP)
        display = self.currency_symbol if show_symbol else self.currency
        return f"{value} {display}"
