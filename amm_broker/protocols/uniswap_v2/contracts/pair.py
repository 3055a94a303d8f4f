"""Uniswap V2 Pair contract wrapper"""

from ....utils.gas import GasManager
from ....utils.transactions import TransactionBuilder
from ..math import spot_price


class Pair:
    """Wrapper for Uniswap V2 Pair interactions"""

    def __init__(self, manager, address, gas_manager=None):
        """
        Args:
            manager: Web3Manager instance
            address: Pair contract address
            gas_manager: GasManager instance (created if None)
        """
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(self.address, "uniswap_v2_pair")
        self.tx_builder = TransactionBuilder(manager, gas_manager or GasManager(manager))
        self._token0 = None

    @property
    def token0(self):
        if self._token0 is None:
            self._token0 = self.manager.checksum(self.contract.functions.token0().call())
        return self._token0

    @property
    def token1(self):
        return self.manager.checksum(self.contract.functions.token1().call())

    def get_reserves(self):
        """(reserve0, reserve1) in pair token order"""
        reserve0, reserve1, _ = self.contract.functions.getReserves().call()
        return reserve0, reserve1

    def reserves_for(self, token_a, token_b):
        """(reserve_a, reserve_b) ordered to match the caller's tokens"""
        reserve0, reserve1 = self.get_reserves()
        if self.manager.checksum(token_a) == self.token0:
            return reserve0, reserve1
        return reserve1, reserve0

    def sync(self, sender=None):
        """Force reserves to match the pair's token balances"""
        return self.tx_builder.build_and_send(self.contract.functions.sync(), sender=sender, operation_type="sync")

    def spot_price(self, token_a, token_b):
        """Price of token_b in units of token_a, from current reserves"""
        return spot_price(*self.reserves_for(token_a, token_b))
