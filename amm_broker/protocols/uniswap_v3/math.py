"""Price, tick and path helpers for Uniswap V3 pools"""

import math
from decimal import Decimal, localcontext
from fractions import Fraction

from ...core.exceptions import InvalidInputError
from .config import FEE_SIZE, get_tick_spacing
from .libraries.tick_bitmap import compress, position

Q96 = 2 ** 96
Q192 = 2 ** 192


def _as_fraction(value):
    # str() keeps 8.5 as 17/2 instead of the binary float expansion
    if isinstance(value, Fraction):
        return value
    return Fraction(str(value))


def encode_price_sqrt(reserve1, reserve0):
    """
    sqrtPriceX96 for a price of reserve1 / reserve0 (token1 per token0).

    Accepts ints, decimals or numeric strings. The result is the floor of
    sqrt(reserve1 / reserve0) * 2^96.
    """
    ratio = _as_fraction(reserve1) / _as_fraction(reserve0)
    if ratio <= 0:
        raise InvalidInputError(f"Price must be positive: {reserve1}/{reserve0}")
    return math.isqrt(math.floor(ratio * Q192))


def decode_price_sqrt(sqrt_price_x96, decimals=18):
    """
    Price (token1 per token0) for a sqrtPriceX96, as a Decimal.

    Squared at full precision and then rounded to `decimals` places, so a
    price produced by encode_price_sqrt decodes back to the same value.
    """
    with localcontext() as ctx:
        ctx.prec = 100
        price = (Decimal(sqrt_price_x96) / Decimal(Q96)) ** 2
        return price.quantize(Decimal(1).scaleb(-decimals))


def get_tick_from_price(price, fee):
    """Tick closest to price, rounded to the pool's tick spacing"""
    if Decimal(str(price)) <= 0:
        raise InvalidInputError(f"Price must be positive: {price}")
    tick_spacing = get_tick_spacing(fee)
    raw_tick = math.log(float(price)) / math.log(1.0001)
    return math.floor(raw_tick / tick_spacing + 0.5) * tick_spacing


def get_tick_bitmap_index(tick, tick_spacing):
    """Word position of tick in the pool's tickBitmap mapping"""
    return position(compress(tick, tick_spacing))[0]


def encode_path(path, fees):
    """
    Packed multi-hop path: token, fee (3 bytes), token, fee, ..., token.

    Returns a lowercase 0x-prefixed hex string as expected by exactInput.
    """
    if len(path) != len(fees) + 1:
        raise InvalidInputError("path/fee lengths do not match")

    encoded = "0x"
    for token, fee in zip(path, fees):
        encoded += token[2:]
        encoded += format(int(fee), "x").zfill(2 * FEE_SIZE)
    encoded += path[-1][2:]
    return encoded.lower()
