"""Swap-to-price brokers for Uniswap V2 and V3"""

from .base import BaseBroker

__all__ = ["BaseBroker"]
