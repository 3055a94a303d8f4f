"""Transaction sending for local signers and unlocked node accounts"""

import structlog
from web3 import Web3

from ..core.exceptions import TransactionError
from .gas import GasManager

logger = structlog.get_logger()


class TransactionBuilder:
    """Build, send and confirm contract transactions"""

    def __init__(self, manager, gas_manager=None):
        """
        Args:
            manager: Web3Manager instance
            gas_manager: GasManager instance (created if None, loads from gas_config.json)
        """
        self.manager = manager
        self.gas_manager = gas_manager or GasManager(manager)

    def build(self, contract_func, sender, gas_buffer=1.2, value=0):
        """
        Build a transaction for a contract function or constructor.

        Gas is estimated against the current state, so a call that would
        revert raises here (web3 ContractLogicError) before anything is sent.

        Args:
            contract_func: Contract function (or ContractConstructor) to call
            sender: Checksummed sending address
            gas_buffer: Multiplier for the gas estimate (default 1.2 = +20%)
            value: ETH value to send in wei

        Returns:
            Transaction dictionary ready for signing
        """
        tx = {"from": sender, "value": value}
        estimated_gas = contract_func.estimate_gas(tx)

        tx.update(self.gas_manager.get_gas_params())
        tx.update({
            "nonce": self.manager.get_nonce(sender),
            "gas": int(estimated_gas * gas_buffer),
            "chainId": self.manager.chain_id,
        })
        return contract_func.build_transaction(tx)

    def build_and_send(self, contract_func, sender=None, operation_type=None,
                       gas_buffer=1.2, value=0, wait=True):
        """
        Send a transaction from sender and wait for it to be mined.

        Locally held keys sign the transaction here; any other sender must be
        an account the node has unlocked, and the node signs it.

        Args:
            contract_func: Contract function (or ContractConstructor) to call
            sender: Sending address (default: manager.address)
            operation_type: Label used in logs and error messages
            gas_buffer: Multiplier for gas estimate
            value: ETH value to send in wei
            wait: Whether to wait for receipt

        Returns:
            Transaction receipt if wait=True, else tx_hash

        Raises:
            TransactionError: If the mined receipt reports failure
        """
        sender = self.manager.checksum(sender or self.manager.address)
        signer = self.manager.signer_for(sender)
        w3 = self.manager.w3

        if signer is not None:
            tx = self.build(contract_func, sender, gas_buffer, value)
            signed = signer.sign_transaction(tx)
            tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            tx_hash = contract_func.transact({"from": sender, "value": value})

        logger.debug("transaction_sent", operation=operation_type, sender=sender, tx_hash=Web3.to_hex(tx_hash))

        if not wait:
            return tx_hash

        receipt = w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt.status != 1:
            label = operation_type or "Transaction"
            raise TransactionError(f"{label} failed: {Web3.to_hex(tx_hash)}")

        logger.debug("transaction_mined", operation=operation_type, gas_used=receipt.gasUsed)
        return receipt
