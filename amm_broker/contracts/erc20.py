"""ERC20 token contract wrappers"""

import structlog

from ..utils.gas import GasManager
from .artifacts import deploy_contract
from ..utils.transactions import TransactionBuilder

logger = structlog.get_logger()


class ERC20:
    """Wrapper for ERC20 token interactions"""

    ABI_NAME = "erc20"

    def __init__(self, manager, address, gas_manager=None):
        """
        Args:
            manager: Web3Manager instance
            address: Token contract address
            gas_manager: GasManager instance (created from gas_config.json if None)
        """
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(self.address, self.ABI_NAME)

        self.gas_manager = gas_manager or GasManager(manager)
        self.tx_builder = TransactionBuilder(manager, self.gas_manager)

    def balance_of(self, address=None):
        """Get token balance in wei"""
        addr = address or self.manager.address
        return self.contract.functions.balanceOf(self.manager.checksum(addr)).call()

    def allowance(self, spender, owner=None):
        """Get allowance for spender"""
        owner_addr = owner or self.manager.address
        return self.contract.functions.allowance(
            self.manager.checksum(owner_addr), self.manager.checksum(spender)
        ).call()

    def approve(self, spender, amount_wei, sender=None):
        """
        Approve spender to spend sender's tokens.

        Returns:
            Tx receipt, or None if the allowance already covers amount_wei
        """
        owner = sender or self.manager.address
        if self.allowance(spender, owner) >= amount_wei:
            return None

        contract_func = self.contract.functions.approve(self.manager.checksum(spender), amount_wei)
        return self.tx_builder.build_and_send(contract_func, sender=owner, operation_type="approve")

    def transfer(self, recipient, amount_wei, sender=None):
        contract_func = self.contract.functions.transfer(self.manager.checksum(recipient), amount_wei)
        return self.tx_builder.build_and_send(contract_func, sender=sender, operation_type="transfer")

    def transfer_from(self, owner, recipient, amount_wei, sender=None):
        """Move owner's tokens to recipient using sender's allowance"""
        contract_func = self.contract.functions.transferFrom(
            self.manager.checksum(owner), self.manager.checksum(recipient), amount_wei
        )
        return self.tx_builder.build_and_send(contract_func, sender=sender, operation_type="transferFrom")


class ExpandedERC20(ERC20):
    """
    ERC20 with role-gated minting.

    The deployer holds the owner role and can add members to the minter role
    with add_member(MINTER_ROLE, address); minters can then mint freely.
    """

    ABI_NAME = "expanded_erc20"

    OWNER_ROLE = 0
    MINTER_ROLE = 1
    BURNER_ROLE = 2

    @classmethod
    def deploy(cls, manager, name, symbol, decimals=18, sender=None, artifacts_dir=None):
        """Deploy a new token from the ExpandedERC20 artifact and wrap it"""
        contract = deploy_contract(
            manager, "ExpandedERC20", name, symbol, decimals, sender=sender, artifacts_dir=artifacts_dir
        )
        return cls(manager, contract.address)

    def add_member(self, role_id, member, sender=None):
        contract_func = self.contract.functions.addMember(role_id, self.manager.checksum(member))
        return self.tx_builder.build_and_send(contract_func, sender=sender, operation_type="addMember")

    def mint(self, recipient, amount_wei, sender=None):
        contract_func = self.contract.functions.mint(self.manager.checksum(recipient), amount_wei)
        receipt = self.tx_builder.build_and_send(contract_func, sender=sender, operation_type="mint")
        logger.debug("tokens_minted", token=self.address, recipient=recipient, amount=amount_wei)
        return receipt
