"""Uniswap V3 SwapRouter contract wrapper"""

from ....utils.gas import GasManager
from ....utils.transactions import TransactionBuilder


class SwapRouter:
    """Wrapper for the (v1) SwapRouter, whose params carry a deadline"""

    def __init__(self, manager, address, gas_manager=None):
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(self.address, "uniswap_v3_router")
        self.tx_builder = TransactionBuilder(manager, gas_manager or GasManager(manager))

    def exact_input_single(self, token_in, token_out, fee, recipient, deadline, amount_in,
                           amount_out_minimum=0, sqrt_price_limit_x96=0, sender=None):
        """
        Swap exactly amount_in through one pool.

        A non-zero sqrt_price_limit_x96 stops the swap at that price and
        leaves any unspent input with the sender.
        """
        params = (
            self.manager.checksum(token_in),
            self.manager.checksum(token_out),
            fee,
            self.manager.checksum(recipient),
            deadline,
            amount_in,
            amount_out_minimum,
            sqrt_price_limit_x96,
        )
        contract_func = self.contract.functions.exactInputSingle(params)
        return self.tx_builder.build_and_send(contract_func, sender=sender, operation_type="swap")

    def exact_input(self, path, recipient, deadline, amount_in, amount_out_minimum=0, sender=None):
        """Multi-hop exact input swap; path comes from encode_path"""
        params = (path, self.manager.checksum(recipient), deadline, amount_in, amount_out_minimum)
        contract_func = self.contract.functions.exactInput(params)
        return self.tx_builder.build_and_send(contract_func, sender=sender, operation_type="swap")
