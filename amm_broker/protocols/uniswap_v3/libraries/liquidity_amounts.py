"""LiquidityAmounts: liquidity for token amounts and back"""

from ....utils.math import mul_div
from .sqrt_price_math import Q96, get_amount0_delta, get_amount1_delta


def _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96):
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        return sqrt_ratio_b_x96, sqrt_ratio_a_x96
    return sqrt_ratio_a_x96, sqrt_ratio_b_x96


def get_liquidity_for_amount0(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0):
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    intermediate = mul_div(sqrt_ratio_a_x96, sqrt_ratio_b_x96, Q96)
    return mul_div(amount0, intermediate, sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def get_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1):
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    return mul_div(amount1, Q96, sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def get_liquidity_for_amounts(sqrt_ratio_x96, sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0, amount1):
    """
    Maximum liquidity a position over [a, b] receives for amount0 and amount1
    at the current price, as the position manager computes it on mint.
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        return get_liquidity_for_amount0(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0)
    if sqrt_ratio_x96 < sqrt_ratio_b_x96:
        liquidity0 = get_liquidity_for_amount0(sqrt_ratio_x96, sqrt_ratio_b_x96, amount0)
        liquidity1 = get_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_x96, amount1)
        return min(liquidity0, liquidity1)
    return get_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1)


def get_amounts_for_liquidity(sqrt_ratio_x96, sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity):
    """Token amounts (rounded down) held by liquidity over [a, b]"""
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        return get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, False), 0
    if sqrt_ratio_x96 < sqrt_ratio_b_x96:
        return (
            get_amount0_delta(sqrt_ratio_x96, sqrt_ratio_b_x96, liquidity, False),
            get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_x96, liquidity, False),
        )
    return 0, get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, False)
