"""Utility functions for math, addresses, gas and transactions"""

from .math import mul_div, babylonian_sqrt, MAX_UINT256, MAX_INT256
from .create2 import create2_address, sort_tokens
from .gas import GasConfig, GasManager
from .transactions import TransactionBuilder

__all__ = [
    "mul_div",
    "babylonian_sqrt",
    "MAX_UINT256",
    "MAX_INT256",
    "create2_address",
    "sort_tokens",
    "GasConfig",
    "GasManager",
    "TransactionBuilder",
]
