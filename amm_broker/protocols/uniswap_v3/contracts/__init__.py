"""Uniswap V3 contract wrappers"""

from .factory import Factory
from .nfpm import NFPM
from .pool import Pool
from .router import SwapRouter
from .tick_lens import TickLens

__all__ = ["Factory", "NFPM", "Pool", "SwapRouter", "TickLens"]
