"""Swap-to-price broker for Uniswap V3 pools"""

from typing import NamedTuple

import structlog
from web3 import Web3

from ...contracts.erc20 import ERC20
from ...core.exceptions import InvalidInputError
from ...utils.math import MAX_INT256
from ..base import BaseBroker
from .contracts.pool import Pool
from .contracts.router import SwapRouter
from .libraries.tick_math import MAX_SQRT_RATIO, MIN_SQRT_RATIO
from .math import decode_price_sqrt

logger = structlog.get_logger()


class V3Trade(NamedTuple):
    """Single-pool trade that walks the price to a target."""

    #: Sell token0 (price goes down) or token1 (price goes up)
    zero_for_one: bool

    #: Input including the LP fee
    amount_in: int

    amount_out: int
    sqrt_price_x96_after: int
    tick_after: int

    @property
    def is_empty(self):
        return self.amount_in == 0


class UniswapV3Broker(BaseBroker):
    """Trade a Uniswap V3 pool to a target sqrtPriceX96 through the SwapRouter"""

    def compute_trade_to_move_market(self, pool_state, target_sqrt_price_x96):
        """
        Input needed to move pool_state to target_sqrt_price_x96.

        Replays the pool's swap loop as an exact-input swap with an unbounded
        amount and the target as price limit, so every initialized tick in
        between is crossed with its liquidityNet applied.

        Args:
            pool_state: PoolState (from Pool.snapshot or built locally)
            target_sqrt_price_x96: Price to stop at

        Returns:
            V3Trade (empty when the pool already sits at the target)
        """
        if not MIN_SQRT_RATIO < target_sqrt_price_x96 < MAX_SQRT_RATIO:
            raise InvalidInputError(f"Target sqrtPriceX96 out of range: {target_sqrt_price_x96}")

        current = pool_state.sqrt_price_x96
        if target_sqrt_price_x96 == current:
            return V3Trade(False, 0, 0, current, pool_state.tick)

        zero_for_one = target_sqrt_price_x96 < current
        result = pool_state.swap(zero_for_one, MAX_INT256, target_sqrt_price_x96)

        if zero_for_one:
            amount_in, amount_out = result.amount0, -result.amount1
        else:
            amount_in, amount_out = result.amount1, -result.amount0

        logger.debug(
            "v3_trade_computed",
            zero_for_one=zero_for_one,
            amount_in=amount_in,
            amount_out=amount_out,
            ticks_crossed=result.ticks_crossed,
        )
        return V3Trade(zero_for_one, amount_in, amount_out, result.sqrt_price_x96, result.tick)

    def swap_to_price(self, trading_as_eoa, pool, router, target_sqrt_price_x96, recipient, deadline,
                      trader=None, max_spend=None):
        """
        Move a pool's price to target_sqrt_price_x96 with one exactInputSingle.

        Args:
            trading_as_eoa: Pull the input from trader (True) or use the broker's balance
            pool: Pool address
            router: SwapRouter address
            target_sqrt_price_x96: Target price, also passed as sqrtPriceLimitX96
            recipient: Receiver of the swap output
            deadline: Unix timestamp after which the router rejects the swap
            trader: Account funding the trade in EOA mode (default: broker)
            max_spend: Optional cap on the input amount

        Returns:
            Dict with the computed trade and the swap receipt (None when the
            pool already sits at the target)
        """
        pool_contract = Pool(self.manager, pool)
        state = pool_contract.snapshot()
        trade = self.compute_trade_to_move_market(state, target_sqrt_price_x96)

        result = {
            "pool": pool_contract.address,
            "sqrt_price_x96_before": state.sqrt_price_x96,
            "target_sqrt_price_x96": target_sqrt_price_x96,
            "target_price": str(decode_price_sqrt(target_sqrt_price_x96)),
            "zero_for_one": trade.zero_for_one,
            "amount_in": 0,
            "expected_amount_out": trade.amount_out,
            "receipt": None,
        }

        if trade.is_empty:
            logger.info("pool_at_target_price", pool=pool_contract.address)
            return result

        amount_in = trade.amount_in
        if max_spend is not None:
            amount_in = min(amount_in, max_spend)
        if amount_in <= 0:
            logger.info("max_spend_exhausted", pool=pool_contract.address)
            return result

        token0, token1 = pool_contract.token0, pool_contract.token1
        token_in, token_out = (token0, token1) if trade.zero_for_one else (token1, token0)

        router_contract = SwapRouter(self.manager, router, self.gas_manager)
        broker = self._fund_and_approve(
            ERC20(self.manager, token_in, self.gas_manager),
            amount_in,
            router_contract.address,
            trading_as_eoa,
            trader or self.broker_address,
        )

        logger.info(
            "swap_to_price",
            pool=pool_contract.address,
            zero_for_one=trade.zero_for_one,
            amount_in=amount_in,
            capped=amount_in < trade.amount_in,
        )
        receipt = router_contract.exact_input_single(
            token_in,
            token_out,
            state.fee,
            recipient,
            deadline,
            amount_in,
            amount_out_minimum=0,
            sqrt_price_limit_x96=target_sqrt_price_x96,
            sender=broker,
        )

        result["amount_in"] = amount_in
        result["receipt"] = receipt
        result["tx_hash"] = Web3.to_hex(receipt.transactionHash)
        return result
