"""Off-chain replica of a V3 pool's swap state"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import structlog

from ...core.exceptions import InvalidInputError, PoolError
from .config import get_tick_spacing
from .libraries.liquidity_amounts import get_liquidity_for_amounts
from .libraries.swap_math import compute_swap_step
from .libraries.tick_bitmap import flip_tick, next_initialized_tick_within_one_word
from .libraries.tick_math import (
    MAX_SQRT_RATIO,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MIN_TICK,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)

logger = structlog.get_logger()


@dataclass
class SwapResult:
    """Outcome of a simulated swap; positive amounts flow into the pool."""

    amount0: int
    amount1: int
    sqrt_price_x96: int
    tick: int
    liquidity: int
    ticks_crossed: int


@dataclass
class PoolState:
    """
    Swap-relevant state of a Uniswap V3 pool.

    Bitmap words and liquidityNet values are fetched on first use through
    the optional readers (wired to the pool contract by Pool.snapshot) and
    cached; without readers the state is purely local and starts empty.
    """

    sqrt_price_x96: int
    tick: int
    liquidity: int
    fee: int
    tick_spacing: int
    bitmap_reader: Optional[Callable[[int], int]] = None
    liquidity_net_reader: Optional[Callable[[int], int]] = None
    tick_bitmap: Dict[int, int] = field(default_factory=dict)
    liquidity_net: Dict[int, int] = field(default_factory=dict)
    liquidity_gross: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def initialize(cls, sqrt_price_x96, fee, tick_spacing=None):
        """Empty pool at sqrt_price_x96, as after Pool.initialize"""
        return cls(
            sqrt_price_x96=sqrt_price_x96,
            tick=get_tick_at_sqrt_ratio(sqrt_price_x96),
            liquidity=0,
            fee=fee,
            tick_spacing=tick_spacing or get_tick_spacing(fee),
        )

    def get_bitmap_word(self, word_pos):
        if word_pos not in self.tick_bitmap:
            self.tick_bitmap[word_pos] = self.bitmap_reader(word_pos) if self.bitmap_reader else 0
        return self.tick_bitmap[word_pos]

    def get_liquidity_net(self, tick):
        if tick not in self.liquidity_net:
            self.liquidity_net[tick] = self.liquidity_net_reader(tick) if self.liquidity_net_reader else 0
        return self.liquidity_net[tick]

    def _update_tick(self, tick, liquidity_delta, upper):
        gross_before = self.liquidity_gross.get(tick, 0)
        if gross_before == 0:
            flip_tick(self.tick_bitmap, tick, self.tick_spacing)
        self.liquidity_gross[tick] = gross_before + liquidity_delta
        net = self.get_liquidity_net(tick)
        self.liquidity_net[tick] = net - liquidity_delta if upper else net + liquidity_delta

    def add_liquidity(self, tick_lower, tick_upper, liquidity):
        """Add a position of `liquidity` over [tick_lower, tick_upper)."""
        if self.bitmap_reader is not None or self.liquidity_net_reader is not None:
            raise PoolError("Positions can only be added to a local pool state")
        if liquidity <= 0:
            raise InvalidInputError(f"Liquidity must be positive, got {liquidity}")
        if not MIN_TICK <= tick_lower < tick_upper <= MAX_TICK:
            raise InvalidInputError(f"Invalid tick range: [{tick_lower}, {tick_upper}]")
        if tick_lower % self.tick_spacing or tick_upper % self.tick_spacing:
            raise InvalidInputError(f"Ticks must be multiples of {self.tick_spacing}")

        self._update_tick(tick_lower, liquidity, upper=False)
        self._update_tick(tick_upper, liquidity, upper=True)

        if tick_lower <= self.tick < tick_upper:
            self.liquidity += liquidity

    def add_position(self, tick_lower, tick_upper, amount0_desired, amount1_desired):
        """
        Add the liquidity a position manager mint would create for the desired
        amounts at the current price. Returns the liquidity added.
        """
        liquidity = get_liquidity_for_amounts(
            self.sqrt_price_x96,
            get_sqrt_ratio_at_tick(tick_lower),
            get_sqrt_ratio_at_tick(tick_upper),
            amount0_desired,
            amount1_desired,
        )
        self.add_liquidity(tick_lower, tick_upper, liquidity)
        return liquidity

    def swap(self, zero_for_one, amount_specified, sqrt_price_limit_x96=None, apply=False):
        """
        Run the pool's swap loop without touching the chain.

        Args:
            zero_for_one: Swap token0 for token1 (price moves down)
            amount_specified: Exact input if positive, exact output if negative
            sqrt_price_limit_x96: Price the swap may not pass (default: the
                extreme allowed by the pool)
            apply: Write the resulting price, tick and liquidity back

        Returns:
            SwapResult
        """
        if amount_specified == 0:
            raise InvalidInputError("amount_specified must not be zero")

        if sqrt_price_limit_x96 is None:
            sqrt_price_limit_x96 = MIN_SQRT_RATIO + 1 if zero_for_one else MAX_SQRT_RATIO - 1

        if zero_for_one:
            valid = MIN_SQRT_RATIO < sqrt_price_limit_x96 < self.sqrt_price_x96
        else:
            valid = self.sqrt_price_x96 < sqrt_price_limit_x96 < MAX_SQRT_RATIO
        if not valid:
            raise InvalidInputError(
                f"Price limit {sqrt_price_limit_x96} is on the wrong side of {self.sqrt_price_x96}"
            )

        exact_input = amount_specified > 0
        amount_remaining = amount_specified
        amount_calculated = 0
        sqrt_price_x96 = self.sqrt_price_x96
        tick = self.tick
        liquidity = self.liquidity
        ticks_crossed = 0

        while amount_remaining != 0 and sqrt_price_x96 != sqrt_price_limit_x96:
            sqrt_price_start_x96 = sqrt_price_x96

            tick_next, initialized = next_initialized_tick_within_one_word(
                self.get_bitmap_word, tick, self.tick_spacing, zero_for_one
            )
            tick_next = max(MIN_TICK, min(MAX_TICK, tick_next))
            sqrt_price_next_x96 = get_sqrt_ratio_at_tick(tick_next)

            if zero_for_one:
                past_limit = sqrt_price_next_x96 < sqrt_price_limit_x96
            else:
                past_limit = sqrt_price_next_x96 > sqrt_price_limit_x96
            sqrt_price_target_x96 = sqrt_price_limit_x96 if past_limit else sqrt_price_next_x96

            sqrt_price_x96, amount_in, amount_out, fee_amount = compute_swap_step(
                sqrt_price_x96, sqrt_price_target_x96, liquidity, amount_remaining, self.fee
            )

            if exact_input:
                amount_remaining -= amount_in + fee_amount
                amount_calculated -= amount_out
            else:
                amount_remaining += amount_out
                amount_calculated += amount_in + fee_amount

            if sqrt_price_x96 == sqrt_price_next_x96:
                if initialized:
                    liquidity_net = self.get_liquidity_net(tick_next)
                    if zero_for_one:
                        liquidity_net = -liquidity_net
                    liquidity += liquidity_net
                    if liquidity < 0:
                        raise PoolError(f"Negative liquidity after crossing tick {tick_next}")
                    ticks_crossed += 1
                tick = tick_next - 1 if zero_for_one else tick_next
            elif sqrt_price_x96 != sqrt_price_start_x96:
                tick = get_tick_at_sqrt_ratio(sqrt_price_x96)

        if zero_for_one == exact_input:
            amount0, amount1 = amount_specified - amount_remaining, amount_calculated
        else:
            amount0, amount1 = amount_calculated, amount_specified - amount_remaining

        logger.debug(
            "pool_swap_simulated",
            zero_for_one=zero_for_one,
            amount0=amount0,
            amount1=amount1,
            ticks_crossed=ticks_crossed,
        )

        if apply:
            self.sqrt_price_x96 = sqrt_price_x96
            self.tick = tick
            self.liquidity = liquidity

        return SwapResult(amount0, amount1, sqrt_price_x96, tick, liquidity, ticks_crossed)
