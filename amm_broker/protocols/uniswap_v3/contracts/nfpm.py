"""Uniswap V3 NonfungiblePositionManager contract wrapper"""

import time
from web3 import Web3
from ....utils.gas import GasManager
from ....utils.transactions import TransactionBuilder


class NFPM:
    """Wrapper for NonfungiblePositionManager interactions"""

    def __init__(self, manager, address, gas_manager=None):
        """
        Args:
            manager: Web3Manager instance
            address: NonfungiblePositionManager address
            gas_manager: GasManager instance (created if None)
        """
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(self.address, "uniswap_v3_nfpm")

        self.gas_manager = gas_manager or GasManager(manager)
        self.tx_builder = TransactionBuilder(manager, self.gas_manager)

    def create_and_initialize_pool_if_necessary(self, token0, token1, fee, sqrt_price_x96, sender=None):
        """
        Create the pool and set its starting price (no-op if it already exists).

        token0 must sort below token1.
        """
        contract_func = self.contract.functions.createAndInitializePoolIfNecessary(
            Web3.to_checksum_address(token0),
            Web3.to_checksum_address(token1),
            fee,
            sqrt_price_x96,
        )
        return self.tx_builder.build_and_send(
            contract_func, sender=sender, operation_type="createPool", gas_buffer=1.5
        )

    def mint(self, params, sender=None, gas_buffer=1.2):
        """
        Mint new liquidity position.

        Args:
            params: dict with token0, token1, fee, tick_lower, tick_upper,
                   amount0_desired, amount1_desired, amount0_min, amount1_min,
                   recipient, deadline
            sender: Account paying the tokens (default: manager.address)
            gas_buffer: multiplier for gas estimate

        Returns:
            Dict with receipt, token_id, liquidity, amount0, amount1
        """
        mint_params = (
            Web3.to_checksum_address(params["token0"]),
            Web3.to_checksum_address(params["token1"]),
            params["fee"],
            params["tick_lower"],
            params["tick_upper"],
            params["amount0_desired"],
            params["amount1_desired"],
            params.get("amount0_min", 0),
            params.get("amount1_min", 0),
            Web3.to_checksum_address(params["recipient"]),
            params.get("deadline", int(time.time()) + 1800),
        )

        contract_func = self.contract.functions.mint(mint_params)
        receipt = self.tx_builder.build_and_send(
            contract_func,
            sender=sender,
            operation_type="mint",
            gas_buffer=gas_buffer
        )

        # Parse token ID from event
        events = self.contract.events.IncreaseLiquidity().process_receipt(receipt)
        if not events:
            return {"receipt": receipt, "token_id": None, "liquidity": None, "amount0": None, "amount1": None}

        args = events[0]["args"]
        return {
            "receipt": receipt,
            "token_id": args["tokenId"],
            "liquidity": args["liquidity"],
            "amount0": args["amount0"],
            "amount1": args["amount1"],
        }
