"""
AMM Broker - Uniswap V2/V3 swap-to-price brokers and deployment glue
"""

from .core.connection import Web3Manager
from .core.config import Config
from .core.exceptions import AMMError, ConfigError, ConnectionError, TransactionError
from .protocols.uniswap_v2 import UniswapV2Broker
from .protocols.uniswap_v3 import UniswapV3Broker

__version__ = "0.1.0"
__all__ = [
    "Web3Manager",
    "Config",
    "AMMError",
    "ConfigError",
    "ConnectionError",
    "TransactionError",
    "UniswapV2Broker",
    "UniswapV3Broker",
]
