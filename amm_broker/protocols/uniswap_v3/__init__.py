"""Uniswap V3 protocol implementation"""

from .broker import UniswapV3Broker, V3Trade
from .config import (
    FeeAmount,
    TICK_SPACINGS,
    MAX_UINT_VAL,
    compute_pool_address,
    get_tick_spacing,
)
from .contracts import Factory, NFPM, Pool, SwapRouter, TickLens
from .math import (
    decode_price_sqrt,
    encode_path,
    encode_price_sqrt,
    get_tick_bitmap_index,
    get_tick_from_price,
)
from .operations import LiquidityManager
from .state import PoolState, SwapResult

__all__ = [
    "UniswapV3Broker",
    "V3Trade",
    "FeeAmount",
    "TICK_SPACINGS",
    "MAX_UINT_VAL",
    "compute_pool_address",
    "get_tick_spacing",
    "Factory",
    "NFPM",
    "Pool",
    "SwapRouter",
    "TickLens",
    "decode_price_sqrt",
    "encode_path",
    "encode_price_sqrt",
    "get_tick_bitmap_index",
    "get_tick_from_price",
    "LiquidityManager",
    "PoolState",
    "SwapResult",
]
