"""Constant-product (x * y = k) swap quotes."""

from dataclasses import dataclass
from decimal import Decimal, localcontext

from ..shared.price import ARITHMETIC_CONTEXT, divide

# 0.3% pool fee, taken from the input before the curve math.
FEE = Decimal("0.003")
FEE_MULTIPLIER = 1 - FEE


@dataclass(frozen=True)
class SwapQuote:
    """Result of quoting a swap against a pair's reserves."""

    amount_out: Decimal
    reserves_in_after: Decimal
    reserves_out_after: Decimal


def get_amount_out(
    amount_in: Decimal,
    reserve_in: Decimal,
    reserve_out: Decimal,
) -> SwapQuote:
    """Quote the output of swapping ``amount_in`` into the pool.

    The fee only reduces the input used by the curve. ``reserves_in_after``
    records the full nominal ``amount_in``.

    Callers must ensure ``reserve_in + amount_in * FEE_MULTIPLIER`` is
    non-zero.
    """
    with localcontext(ARITHMETIC_CONTEXT):
        effective_in = amount_in * FEE_MULTIPLIER
        amount_out = reserve_out - divide(
            reserve_out * reserve_in, reserve_in + effective_in
        )
        return SwapQuote(
            amount_out=amount_out,
            reserves_in_after=reserve_in + amount_in,
            reserves_out_after=reserve_out - amount_out,
        )
