"""Web3 connection management"""

import os
import structlog
from web3 import Web3
from dotenv import load_dotenv
from eth_account import Account
from mnemonic import Mnemonic
from .config import Config
from .exceptions import ConnectionError, ConfigError

logger = structlog.get_logger()

DEFAULT_MNEMONIC_ACCOUNTS = 10


class Web3Manager:
    """Manages Web3 connection and sending accounts"""

    def __init__(self, require_signer=False, w3=None):
        """
        Initialize Web3 connection.

        Args:
            require_signer: If True, fail unless at least one account can send
                transactions (a local key or an unlocked node account)
            w3: Pre-built Web3 instance (skips RPC_URL lookup)
        """
        load_dotenv()
        load_dotenv("wallet.env")

        self.config = Config()
        if w3 is not None:
            self.w3 = w3
        else:
            self._setup_web3()

        self.local_accounts = self._load_local_accounts()
        self.account = self.local_accounts[0] if self.local_accounts else None

        if require_signer and not self.accounts:
            raise ConfigError(
                "No sending account: set PRIVATE_KEY or MNEMONIC in wallet.env, "
                "or connect to a node with unlocked accounts"
            )

    def _setup_web3(self):
        """Setup Web3 connection"""
        rpc_url = os.getenv("RPC_URL")
        if not rpc_url:
            raise ConfigError("RPC_URL not found in environment")

        self.w3 = Web3(Web3.HTTPProvider(rpc_url))

        if not self.w3.is_connected():
            raise ConnectionError(f"Failed to connect to {rpc_url}")

    def _load_local_accounts(self):
        """Load signing accounts from PRIVATE_KEY or MNEMONIC"""
        private_key = os.getenv("PRIVATE_KEY")
        if private_key:
            return [Account.from_key(private_key)]

        phrase = os.getenv("MNEMONIC")
        if not phrase:
            return []

        phrase = " ".join(phrase.split())
        if not Mnemonic("english").check(phrase):
            raise ConfigError("MNEMONIC is not a valid BIP-39 phrase")

        count = int(os.getenv("MNEMONIC_ACCOUNTS", DEFAULT_MNEMONIC_ACCOUNTS))
        Account.enable_unaudited_hdwallet_features()
        accounts = [
            Account.from_mnemonic(phrase, account_path=f"m/44'/60'/0'/0/{i}")
            for i in range(count)
        ]
        logger.debug("mnemonic_accounts_loaded", count=count)
        return accounts

    @property
    def accounts(self):
        """Sending accounts: local signers first, else the node's unlocked accounts"""
        if self.local_accounts:
            return [acct.address for acct in self.local_accounts]
        return [self.checksum(addr) for addr in self.w3.eth.accounts]

    @property
    def address(self):
        """Default sending address (first local signer, else first node account)"""
        if self.account:
            return self.account.address
        accounts = self.accounts
        return accounts[0] if accounts else None

    def signer_for(self, address):
        """Local account able to sign for address, or None if the node must sign"""
        address = self.checksum(address)
        for acct in self.local_accounts:
            if acct.address == address:
                return acct
        return None

    def get_named_accounts(self):
        """Resolve configured named accounts (deployer, trader, ...) to addresses"""
        accounts = self.accounts
        named = {}
        for name, index in self.config.named_accounts.items():
            if isinstance(index, str):
                named[name] = self.checksum(index)
            elif index < len(accounts):
                named[name] = accounts[index]
        return named

    def get_named_account(self, name):
        named = self.get_named_accounts()
        if name not in named:
            raise ConfigError(f"Named account not available: {name}")
        return named[name]

    @property
    def chain_id(self):
        """Get current chain ID"""
        return self.w3.eth.chain_id

    def get_nonce(self, address=None):
        """Get transaction count (nonce)"""
        addr = address or self.address
        if not addr:
            raise ValueError("No address provided")
        return self.w3.eth.get_transaction_count(addr)

    def get_contract(self, address, abi_name):
        """Create contract instance from a named package ABI"""
        abi = self.config.get_abi(abi_name)
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=abi
        )

    def checksum(self, address):
        """Convert address to checksum format"""
        return Web3.to_checksum_address(address)
