"""Uniswap V2 specific constants"""

from web3 import Web3

from ...utils.create2 import create2_address, sort_tokens

# Mainnet factory and the keccak256 of UniswapV2Pair's creation code
MAINNET_FACTORY = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
PAIR_INIT_CODE_HASH = "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f"


def pair_for(factory, token_a, token_b, init_code_hash=PAIR_INIT_CODE_HASH):
    """
    Pair address for two tokens without a node round trip.

    Only valid for factories compiled from the canonical pair bytecode;
    pass init_code_hash for forks or locally compiled pairs.
    """
    token0, token1 = sort_tokens(token_a, token_b)
    salt = Web3.solidity_keccak(["address", "address"], [token0, token1])
    return create2_address(factory, salt, init_code_hash)
