"""SqrtPriceMath: token deltas and next prices for a fixed liquidity"""

from ....core.exceptions import InvalidInputError
from ....utils.math import (
    MAX_UINT160,
    MAX_UINT256,
    div_rounding_up,
    mul_div,
    mul_div_rounding_up,
)

RESOLUTION = 96
Q96 = 1 << RESOLUTION


def _to_uint160(value):
    if not 0 <= value <= MAX_UINT160:
        raise InvalidInputError(f"sqrt price does not fit in uint160: {value}")
    return value


def get_next_sqrt_price_from_amount0_rounding_up(sqrt_price_x96, liquidity, amount, add):
    """
    Next price after adding or removing amount of token0.

    Mirrors the pool's overflow fallback: when amount * price does not fit in
    256 bits the less precise formula L / (L / P + amount) is used.
    """
    if amount == 0:
        return sqrt_price_x96
    numerator1 = liquidity << RESOLUTION
    product = amount * sqrt_price_x96

    if add:
        if product <= MAX_UINT256:
            denominator = numerator1 + product
            if denominator <= MAX_UINT256:
                return mul_div_rounding_up(numerator1, sqrt_price_x96, denominator)
        return div_rounding_up(numerator1, numerator1 // sqrt_price_x96 + amount)

    if product > MAX_UINT256 or numerator1 <= product:
        raise InvalidInputError("Not enough token0 liquidity for the requested output")
    denominator = numerator1 - product
    return _to_uint160(mul_div_rounding_up(numerator1, sqrt_price_x96, denominator))


def get_next_sqrt_price_from_amount1_rounding_down(sqrt_price_x96, liquidity, amount, add):
    """Next price after adding or removing amount of token1"""
    if add:
        quotient = (amount << RESOLUTION) // liquidity
        return _to_uint160(sqrt_price_x96 + quotient)

    quotient = div_rounding_up(amount << RESOLUTION, liquidity)
    if sqrt_price_x96 <= quotient:
        raise InvalidInputError("Not enough token1 liquidity for the requested output")
    return sqrt_price_x96 - quotient


def get_next_sqrt_price_from_input(sqrt_price_x96, liquidity, amount_in, zero_for_one):
    if sqrt_price_x96 <= 0 or liquidity <= 0:
        raise InvalidInputError("Price and liquidity must be positive")
    if zero_for_one:
        return get_next_sqrt_price_from_amount0_rounding_up(sqrt_price_x96, liquidity, amount_in, True)
    return get_next_sqrt_price_from_amount1_rounding_down(sqrt_price_x96, liquidity, amount_in, True)


def get_next_sqrt_price_from_output(sqrt_price_x96, liquidity, amount_out, zero_for_one):
    if sqrt_price_x96 <= 0 or liquidity <= 0:
        raise InvalidInputError("Price and liquidity must be positive")
    if zero_for_one:
        return get_next_sqrt_price_from_amount1_rounding_down(sqrt_price_x96, liquidity, amount_out, False)
    return get_next_sqrt_price_from_amount0_rounding_up(sqrt_price_x96, liquidity, amount_out, False)


def get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up=None):
    """
    Token0 between two prices: L * (sqrtB - sqrtA) / (sqrtA * sqrtB).

    With round_up=None liquidity is signed (liquidityNet) and the result
    carries its sign, rounding away from the pool.
    """
    if round_up is None:
        if liquidity < 0:
            return -get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity, False)
        return get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, True)

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 <= 0:
        raise InvalidInputError("sqrt price must be positive")

    numerator1 = liquidity << RESOLUTION
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return div_rounding_up(
            mul_div_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96),
            sqrt_ratio_a_x96,
        )
    return mul_div(numerator1, numerator2, sqrt_ratio_b_x96) // sqrt_ratio_a_x96


def get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up=None):
    """Token1 between two prices: L * (sqrtB - sqrtA)."""
    if round_up is None:
        if liquidity < 0:
            return -get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity, False)
        return get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, True)

    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if round_up:
        return mul_div_rounding_up(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)
    return mul_div(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)
