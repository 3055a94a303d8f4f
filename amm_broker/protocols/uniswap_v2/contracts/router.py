"""Uniswap V2 Router02 contract wrapper"""

from ....utils.gas import GasManager
from ....utils.transactions import TransactionBuilder


class Router:
    """Wrapper for Uniswap V2 Router02 swaps"""

    def __init__(self, manager, address, gas_manager=None):
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(self.address, "uniswap_v2_router")
        self.tx_builder = TransactionBuilder(manager, gas_manager or GasManager(manager))

    def swap_exact_tokens_for_tokens(self, amount_in, amount_out_min, path, to, deadline, sender=None):
        """
        Sell exactly amount_in of path[0] along path.

        Returns:
            Transaction receipt
        """
        contract_func = self.contract.functions.swapExactTokensForTokens(
            amount_in,
            amount_out_min,
            [self.manager.checksum(t) for t in path],
            self.manager.checksum(to),
            deadline,
        )
        return self.tx_builder.build_and_send(contract_func, sender=sender, operation_type="swap")
