"""Abstract base class for swap-to-price brokers"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import structlog

from ..core.connection import Web3Manager
from ..utils.gas import GasManager

logger = structlog.get_logger()


class BaseBroker(ABC):
    """
    Moves a pool's spot price to a target by trading against it.

    The broker account (default: the manager's first account) executes all
    swaps. Trading "as EOA" pulls the input tokens from the trader first;
    trading "as contract" spends the broker account's own balance.
    """

    def __init__(self, manager=None, broker=None):
        """
        Args:
            manager: Web3Manager instance (created with signer if None)
            broker: Address that approves the router and sends swaps
        """
        self._manager = manager
        self._gas_manager = None
        self._broker = broker

    @property
    def manager(self):
        # created on first use so trade sizing works without a node
        if self._manager is None:
            self._manager = Web3Manager(require_signer=True)
        return self._manager

    @property
    def gas_manager(self):
        if self._gas_manager is None:
            self._gas_manager = GasManager(self.manager)
        return self._gas_manager

    @property
    def broker_address(self):
        return self.manager.checksum(self._broker or self.manager.address)

    @abstractmethod
    def compute_trade_to_move_market(self, *args, **kwargs) -> Any:
        """
        Compute the trade that moves the pool to the target price.

        Returns:
            Protocol-specific trade description (direction and input amount)
        """
        pass

    @abstractmethod
    def swap_to_price(self, trading_as_eoa: bool, *args, **kwargs) -> Dict[str, Any]:
        """
        Compute and execute the trade that moves the pool to a target price.

        Args:
            trading_as_eoa: Pull input tokens from the trader (True) or use the
                broker account's balance (False)

        Returns:
            Dict describing the executed trade
        """
        pass

    def _fund_and_approve(self, token, amount_in, spender, trading_as_eoa, trader):
        """
        Make amount_in of token spendable by spender from the broker account.

        Returns:
            The broker address that will send the swap
        """
        broker = self.broker_address
        if trading_as_eoa and self.manager.checksum(trader) != broker:
            logger.debug("pulling_input", token=token.address, trader=trader, amount=amount_in)
            token.transfer_from(trader, broker, amount_in, sender=broker)
        token.approve(spender, amount_in, sender=broker)
        return broker
