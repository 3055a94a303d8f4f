"""Uniswap V3 Factory contract wrapper"""

from ....core.exceptions import PoolError
from .pool import Pool


class Factory:
    """Wrapper for Uniswap V3 Factory reads"""

    def __init__(self, manager, address):
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(self.address, "uniswap_v3_factory")

    def get_pool_address(self, token_a, token_b, fee):
        return self.contract.functions.getPool(
            self.manager.checksum(token_a), self.manager.checksum(token_b), fee
        ).call()

    def get_pool(self, token_a, token_b, fee):
        """
        Pool wrapper for two tokens and a fee tier.

        Raises:
            PoolError: If no pool exists
        """
        address = self.get_pool_address(token_a, token_b, fee)
        if int(address, 16) == 0:
            raise PoolError(f"No pool for {token_a}/{token_b} fee {fee}")
        return Pool(self.manager, address)
