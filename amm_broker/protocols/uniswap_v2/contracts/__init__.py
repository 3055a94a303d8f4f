"""Uniswap V2 contract wrappers"""

from .factory import Factory
from .pair import Pair
from .router import Router

__all__ = ["Factory", "Pair", "Router"]
