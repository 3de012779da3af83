"""
Monetary precision helpers for order pricing.

Prices are snapshotted as 2-decimal ``Decimal`` values and totals are summed
at full precision, then rounded once with ``quantize``. Floats never enter
the pricing path.

Key Principles:
1. NEVER use float for money
2. Round the order total once, not per line
3. Use ROUND_HALF_EVEN (banker's rounding) to prevent systematic bias
"""

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Union

# Matches decimal_places=2 on every money column
CENT = Decimal("0.01")


def to_decimal(amount: Union[Decimal, str, int]) -> Decimal:
    if isinstance(amount, float):
        raise TypeError("Monetary amounts must not be floats")
    return amount if isinstance(amount, Decimal) else Decimal(amount)


def quantize(amount: Union[Decimal, str, int]) -> Decimal:
    """
    Round to 2 decimals using banker's rounding (ROUND_HALF_EVEN).

    Examples:
        >>> quantize("10.127")
        Decimal('10.13')
        >>> quantize("10.125")
        Decimal('10.12')  # Banker's rounding
    """
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_EVEN)
