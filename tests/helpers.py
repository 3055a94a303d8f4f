"""Shared constants and pool builders for the test suite."""

from amm_broker.protocols.uniswap_v3 import PoolState, encode_price_sqrt, get_tick_from_price

DEPLOYER = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"
TRADER = "0xFFcf8FDEE72ac11b5c542428B35EEF5769C409f0"
TOKEN_A = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
TOKEN_B = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
ROUTER = "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D"
FACTORY = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
POOL = "0x8ad599c3A0ff1De082011EFDDc58f1908eb6e6D8"

FEE = 3000
WEI = 10**18

# (amount0, amount1, price_lower, price_upper) of each LP around a price of 10
MULTI_LP_POSITIONS = [
    (1000, 100, 8, 15),
    (100, 10, 9.9, 10.1),
    (50, 5, 5, 20),
    (10, 1, 12, 15),
    (10, 1, 6, 8),
    (65, 6.5, 10, 11),
    (65, 6.5, 8.5, 9),
]


def to_wei(amount) -> int:
    return int(float(amount) * WEI)


def pool_at_price_10() -> PoolState:
    """Empty 0.3% pool started the way the position manager does it: 1000/100."""
    return PoolState.initialize(encode_price_sqrt(1000 * WEI, 100 * WEI), FEE)


def single_lp_pool() -> PoolState:
    """One LP providing 1000/100 between prices 8 and 15."""
    state = pool_at_price_10()
    state.add_position(
        get_tick_from_price(8, FEE), get_tick_from_price(15, FEE), 1000 * WEI, 100 * WEI
    )
    return state


def multi_lp_pool() -> PoolState:
    """Seven overlapping LP ranges, some only entered after the price moves."""
    state = pool_at_price_10()
    for amount0, amount1, lower, upper in MULTI_LP_POSITIONS:
        state.add_position(
            get_tick_from_price(lower, FEE),
            get_tick_from_price(upper, FEE),
            to_wei(amount0),
            to_wei(amount1),
        )
    return state
