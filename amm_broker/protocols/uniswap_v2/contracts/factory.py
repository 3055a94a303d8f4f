"""Uniswap V2 Factory contract wrapper"""

from ....core.exceptions import PoolError
from ....utils.gas import GasManager
from ....utils.transactions import TransactionBuilder
from .pair import Pair


class Factory:
    """Wrapper for Uniswap V2 Factory interactions"""

    def __init__(self, manager, address, gas_manager=None):
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(self.address, "uniswap_v2_factory")
        self.gas_manager = gas_manager or GasManager(manager)
        self.tx_builder = TransactionBuilder(manager, self.gas_manager)

    def get_pair_address(self, token_a, token_b):
        return self.contract.functions.getPair(
            self.manager.checksum(token_a), self.manager.checksum(token_b)
        ).call()

    def get_pair(self, token_a, token_b):
        """
        Pair wrapper for two tokens.

        Raises:
            PoolError: If the factory has no pair for them
        """
        address = self.get_pair_address(token_a, token_b)
        if int(address, 16) == 0:
            raise PoolError(f"No pair for {token_a}/{token_b} on factory {self.address}")
        return Pair(self.manager, address, self.gas_manager)

    def create_pair(self, token_a, token_b, sender=None):
        """Create the pair and return its wrapper"""
        contract_func = self.contract.functions.createPair(
            self.manager.checksum(token_a), self.manager.checksum(token_b)
        )
        self.tx_builder.build_and_send(contract_func, sender=sender, operation_type="createPair")
        return self.get_pair(token_a, token_b)
