"""Constant-product math for Uniswap V2 style pairs"""

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import NamedTuple

from ...core.exceptions import InvalidInputError
from ...utils.math import babylonian_sqrt, mul_div

WAD = 10 ** 18


class Fee(NamedTuple):
    """Share of the input that reaches the curve, as numerator/denominator."""

    numerator: int
    denominator: int


UNISWAP_V2_FEE = Fee(997, 1000)
NO_FEE = Fee(1, 1)


class TradeToMoveMarket(NamedTuple):
    a_to_b: bool
    amount_in: int


def _require_positive(**values):
    for name, value in values.items():
        if value <= 0:
            raise InvalidInputError(f"{name} must be positive, got {value}")


def compute_trade_to_move_market(true_price_a, true_price_b, reserve_a, reserve_b, fee=NO_FEE):
    """
    Trade that moves a pair's spot price (A per B) to true_price_a / true_price_b.

    The input needed on the curve x * y = k to reach price P' is
    sqrt(k * P') - R_in. With a fee multiplier f the closed form becomes
    sqrt(k * P' / f) - R_in / f, which is the profit-maximizing arbitrage
    against P' rather than the trade that lands the spot price on it.

    Args:
        true_price_a: Numerator of the target price
        true_price_b: Denominator of the target price
        reserve_a: Pair reserve of token A (smallest unit)
        reserve_b: Pair reserve of token B (smallest unit)
        fee: Fee multiplier applied to the closed form (default: none)

    Returns:
        TradeToMoveMarket(a_to_b, amount_in); amount_in is 0 when the pool
        already sits at the target

    Raises:
        InvalidInputError: If a reserve or price is not positive
    """
    _require_positive(
        true_price_a=true_price_a,
        true_price_b=true_price_b,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
    )
    _require_positive(fee_numerator=fee.numerator, fee_denominator=fee.denominator)

    a_to_b = mul_div(reserve_a, true_price_b, reserve_b) < true_price_a
    invariant = reserve_a * reserve_b

    if a_to_b:
        price_in, price_out, reserve_in = true_price_a, true_price_b, reserve_a
    else:
        price_in, price_out, reserve_in = true_price_b, true_price_a, reserve_b

    left_side = babylonian_sqrt(
        mul_div(invariant * fee.denominator, price_in, price_out * fee.numerator)
    )
    right_side = reserve_in * fee.denominator // fee.numerator

    if left_side < right_side:
        return TradeToMoveMarket(False, 0)

    return TradeToMoveMarket(a_to_b, left_side - right_side)


def get_amount_out(amount_in, reserve_in, reserve_out, fee=UNISWAP_V2_FEE):
    """Output of an exact-input swap (UniswapV2Library.getAmountOut)"""
    if amount_in < 0:
        raise InvalidInputError(f"amount_in must not be negative, got {amount_in}")
    _require_positive(reserve_in=reserve_in, reserve_out=reserve_out)
    amount_in_with_fee = amount_in * fee.numerator
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * fee.denominator + amount_in_with_fee
    return numerator // denominator


def get_amount_in(amount_out, reserve_in, reserve_out, fee=UNISWAP_V2_FEE):
    """Input needed for an exact-output swap (UniswapV2Library.getAmountIn)"""
    _require_positive(amount_out=amount_out, reserve_in=reserve_in, reserve_out=reserve_out)
    if amount_out >= reserve_out:
        raise InvalidInputError(f"Insufficient liquidity: {amount_out} >= reserve {reserve_out}")
    numerator = reserve_in * amount_out * fee.denominator
    denominator = (reserve_out - amount_out) * fee.numerator
    return numerator // denominator + 1


def spot_price(reserve_a, reserve_b):
    """Price of B in units of A, truncated to 18 decimals as a Decimal"""
    _require_positive(reserve_a=reserve_a, reserve_b=reserve_b)
    scaled = reserve_a * WAD // reserve_b
    with localcontext() as ctx:
        ctx.prec = len(str(scaled)) + 1
        return Decimal(scaled) / Decimal(WAD)


@dataclass
class ConstantProductPool:
    """In-memory pair used to replay trades without a node."""

    reserve_a: int
    reserve_b: int
    fee: Fee = UNISWAP_V2_FEE

    @property
    def spot_price(self):
        return spot_price(self.reserve_a, self.reserve_b)

    def get_amount_out(self, amount_in, a_to_b):
        if a_to_b:
            return get_amount_out(amount_in, self.reserve_a, self.reserve_b, self.fee)
        return get_amount_out(amount_in, self.reserve_b, self.reserve_a, self.fee)

    def swap(self, amount_in, a_to_b):
        """Apply an exact-input swap to the reserves and return the amount out."""
        amount_out = self.get_amount_out(amount_in, a_to_b)
        if a_to_b:
            self.reserve_a += amount_in
            self.reserve_b -= amount_out
        else:
            self.reserve_b += amount_in
            self.reserve_a -= amount_out
        return amount_out

    def trade_to_move_market(self, true_price_a, true_price_b, fee=NO_FEE):
        return compute_trade_to_move_market(
            true_price_a, true_price_b, self.reserve_a, self.reserve_b, fee
        )
