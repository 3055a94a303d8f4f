"""Uniswap V3 specific configuration"""

from enum import IntEnum

import eth_abi
from web3 import Web3

from ...core.exceptions import ConfigError
from ...utils.create2 import create2_address, sort_tokens
from ...utils.math import MAX_UINT256


class FeeAmount(IntEnum):
    LOWEST = 100
    LOW = 500
    MEDIUM = 3000
    HIGH = 10000


# Fee tier to tick spacing mapping
TICK_SPACINGS = {
    FeeAmount.LOWEST: 1,
    FeeAmount.LOW: 10,
    FeeAmount.MEDIUM: 60,
    FeeAmount.HIGH: 200,
}

MAX_UINT_VAL = MAX_UINT256
FEE_SIZE = 3

# Mainnet factory and the keccak256 of UniswapV3Pool's creation code
MAINNET_FACTORY = "0x1F98431c8aD98523631AE4a59f267346ea31F984"
POOL_INIT_CODE_HASH = "0xe34f199b19b2b4f47f68442619d555527d244f78a3297ea89325f843f87b8b54"


def get_tick_spacing(fee):
    """Get tick spacing for fee tier"""
    try:
        return TICK_SPACINGS[FeeAmount(fee)]
    except ValueError:
        raise ConfigError(f"Invalid fee tier: {fee}. Valid: {[int(f) for f in FeeAmount]}")


def compute_pool_address(factory, token_a, token_b, fee, init_code_hash=POOL_INIT_CODE_HASH):
    """
    Pool address for (token_a, token_b, fee) as PoolAddress.computeAddress does.

    Tokens may be given in either order.
    """
    token0, token1 = sort_tokens(token_a, token_b)
    salt = Web3.keccak(eth_abi.encode(["address", "address", "uint24"], [token0, token1, int(fee)]))
    return create2_address(factory, salt, init_code_hash)
