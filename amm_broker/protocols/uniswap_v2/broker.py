"""Swap-to-price broker for Uniswap V2 pairs"""

import structlog
from web3 import Web3

from ...contracts.erc20 import ERC20
from ...core.exceptions import InvalidInputError
from ..base import BaseBroker
from .contracts.factory import Factory
from .contracts.router import Router
from .math import NO_FEE, compute_trade_to_move_market

logger = structlog.get_logger()


class UniswapV2Broker(BaseBroker):
    """Trade a Uniswap V2 pair to a target price through Router02"""

    def __init__(self, manager=None, broker=None, fee=NO_FEE):
        """
        Args:
            manager: Web3Manager instance (created with signer if None)
            broker: Address that sends the swaps (default: manager.address)
            fee: Fee multiplier used when sizing the trade (see
                compute_trade_to_move_market)
        """
        super().__init__(manager, broker)
        self.fee = fee

    def compute_trade_to_move_market(self, true_price_a, true_price_b, reserve_a, reserve_b):
        """Trade size for the given reserves; pure, no chain access"""
        return compute_trade_to_move_market(true_price_a, true_price_b, reserve_a, reserve_b, self.fee)

    def swap_to_price(self, trading_as_eoa, router, factory, tokens, true_prices, max_spend,
                      to, deadline, trader=None):
        """
        Move the pair's price (token A per token B) to true_prices[0] / true_prices[1].

        Args:
            trading_as_eoa: Pull the input from trader (True) or use the broker's balance
            router: Router02 address
            factory: Factory address
            tokens: [token_a, token_b]
            true_prices: [true_price_a, true_price_b]
            max_spend: [max_a, max_b] caps on the input amount per token
            to: Recipient of the swap output
            deadline: Unix timestamp after which the router rejects the swap
            trader: Account funding the trade in EOA mode (default: broker)

        Returns:
            Dict with direction, amounts and the swap receipt (None when the
            pair already sits at the target)
        """
        if len(tokens) != 2 or len(true_prices) != 2 or len(max_spend) != 2:
            raise InvalidInputError("tokens, true_prices and max_spend must each have two entries")
        true_price_a, true_price_b = true_prices
        if true_price_a <= 0 or true_price_b <= 0:
            raise InvalidInputError(f"Target price must be positive: {true_price_a}/{true_price_b}")

        token_a, token_b = (self.manager.checksum(t) for t in tokens)
        pair = Factory(self.manager, factory, self.gas_manager).get_pair(token_a, token_b)
        reserve_a, reserve_b = pair.reserves_for(token_a, token_b)

        trade = self.compute_trade_to_move_market(true_price_a, true_price_b, reserve_a, reserve_b)

        result = {
            "pair": pair.address,
            "reserves_before": [reserve_a, reserve_b],
            "a_to_b": trade.a_to_b,
            "amount_in": 0,
            "receipt": None,
        }

        if trade.amount_in == 0:
            logger.info("pair_at_target_price", pair=pair.address, price=f"{true_price_a}/{true_price_b}")
            return result

        if trade.a_to_b:
            path, cap = [token_a, token_b], max_spend[0]
        else:
            path, cap = [token_b, token_a], max_spend[1]
        amount_in = min(trade.amount_in, cap)
        if amount_in <= 0:
            logger.info("max_spend_exhausted", pair=pair.address, a_to_b=trade.a_to_b)
            return result

        router_contract = Router(self.manager, router, self.gas_manager)
        token_in = ERC20(self.manager, path[0], self.gas_manager)
        broker = self._fund_and_approve(
            token_in, amount_in, router_contract.address, trading_as_eoa, trader or self.broker_address
        )

        logger.info(
            "swap_to_price",
            pair=pair.address,
            a_to_b=trade.a_to_b,
            amount_in=amount_in,
            capped=amount_in < trade.amount_in,
        )
        receipt = router_contract.swap_exact_tokens_for_tokens(
            amount_in, 0, path, to, deadline, sender=broker
        )

        result["amount_in"] = amount_in
        result["receipt"] = receipt
        result["tx_hash"] = Web3.to_hex(receipt.transactionHash)
        return result
