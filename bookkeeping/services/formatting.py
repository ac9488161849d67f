"""
Amount formatting.

The currency symbol is passed in, never read from shared
state, so two books with different currencies can be
formatted side by side.
"""

from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")


class CurrencyFormatter:

    def __init__(self, symbol: str):
        self.symbol = symbol

    def format_amount(self, amount: Decimal) -> str:
        """Format as '<symbol> 1234.50'."""
        if not self.symbol:
            return str(quantize(amount))
        return f"{self.symbol} {quantize(amount)}"

    def format_accounting(self, amount: Decimal) -> str:
        """Negative amounts in parentheses, as on a balance sheet."""
        if amount < 0:
            return f"({self.format_amount(abs(amount))})"
        return self.format_amount(amount)


def quantize(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
