"""Python ports of the Uniswap V3 core math libraries"""

from .tick_math import (
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from .swap_math import compute_swap_step
from .tick_bitmap import next_initialized_tick_within_one_word, flip_tick
from .liquidity_amounts import get_liquidity_for_amounts, get_amounts_for_liquidity

__all__ = [
    "MIN_TICK",
    "MAX_TICK",
    "MIN_SQRT_RATIO",
    "MAX_SQRT_RATIO",
    "get_sqrt_ratio_at_tick",
    "get_tick_at_sqrt_ratio",
    "compute_swap_step",
    "next_initialized_tick_within_one_word",
    "flip_tick",
    "get_liquidity_for_amounts",
    "get_amounts_for_liquidity",
]
