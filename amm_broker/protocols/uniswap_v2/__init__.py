"""Uniswap V2 protocol implementation"""

from .broker import UniswapV2Broker
from .config import pair_for
from .contracts import Factory, Pair, Router
from .math import (
    Fee,
    NO_FEE,
    UNISWAP_V2_FEE,
    ConstantProductPool,
    TradeToMoveMarket,
    compute_trade_to_move_market,
    get_amount_in,
    get_amount_out,
    spot_price,
)

__all__ = [
    "UniswapV2Broker",
    "pair_for",
    "Factory",
    "Pair",
    "Router",
    "Fee",
    "NO_FEE",
    "UNISWAP_V2_FEE",
    "ConstantProductPool",
    "TradeToMoveMarket",
    "compute_trade_to_move_market",
    "get_amount_in",
    "get_amount_out",
    "spot_price",
]
