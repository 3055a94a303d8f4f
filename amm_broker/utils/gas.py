"""EIP-1559 Gas management with user-configurable fee caps"""

import json
from pathlib import Path


class GasPriceTooHighError(Exception):
    """Raised when current gas price exceeds the user-specified maximum"""
    pass


class GasConfig:
    """Load and manage gas configuration from JSON file"""

    def __init__(self, config_path=None):
        """
        Args:
            config_path: Path to gas_config.json (searches default locations if None)
        """
        self._config = self._load_config(config_path)

    def _load_config(self, config_path=None):
        """Load config from file or return defaults"""
        search_paths = [
            config_path,
            Path.cwd() / "gas_config.json",
            Path.home() / ".amm-broker" / "gas_config.json",
        ]

        for path in search_paths:
            if path and Path(path).exists():
                with open(path) as f:
                    return json.load(f)

        return {
            "maxFeePerGas": None,
            "maxPriorityFeePerGas": 1.5,
        }

    @property
    def max_fee_per_gas(self):
        """Max fee per gas in Gwei (None = no limit)"""
        return self._config.get("maxFeePerGas")

    @property
    def max_priority_fee_per_gas(self):
        """Priority fee (tip) in Gwei"""
        return self._config.get("maxPriorityFeePerGas", 1.5)


class GasManager:
    """
    EIP-1559 gas pricing for locally signed transactions.

    Falls back to a legacy gasPrice on chains whose blocks carry no
    baseFeePerGas (older ganache forks).
    """

    def __init__(self, manager, max_fee_per_gas=None, max_priority_fee_per_gas=None, config=None):
        """
        Args:
            manager: Web3Manager instance
            max_fee_per_gas: Max fee per gas in Gwei (overrides config)
            max_priority_fee_per_gas: Priority fee in Gwei (overrides config)
            config: GasConfig instance (created if None)
        """
        self.manager = manager
        self.config = config or GasConfig()
        self._max_fee_per_gas = max_fee_per_gas
        self._max_priority_fee_per_gas = max_priority_fee_per_gas

    @property
    def max_fee_per_gas(self):
        if self._max_fee_per_gas is not None:
            return self._max_fee_per_gas
        return self.config.max_fee_per_gas

    @property
    def max_priority_fee_per_gas(self):
        if self._max_priority_fee_per_gas is not None:
            return self._max_priority_fee_per_gas
        return self.config.max_priority_fee_per_gas

    def get_base_fee(self):
        """Base fee of the latest block in Wei (None before London)"""
        latest_block = self.manager.w3.eth.get_block("latest")
        return latest_block.get("baseFeePerGas")

    def get_gas_params(self):
        """
        Get fee fields for a transaction.

        Returns:
            Dict with maxFeePerGas and maxPriorityFeePerGas (Wei), or gasPrice
            on chains without a base fee

        Raises:
            GasPriceTooHighError: If base fee exceeds maxFeePerGas
        """
        base_fee = self.get_base_fee()
        if base_fee is None:
            return {"gasPrice": self.manager.w3.eth.gas_price}

        priority_fee_wei = int((self.max_priority_fee_per_gas or 1.5) * 1e9)

        if self.max_fee_per_gas is not None:
            max_fee_wei = int(self.max_fee_per_gas * 1e9)
            if max_fee_wei < base_fee:
                raise GasPriceTooHighError(
                    f"Current base fee ({base_fee / 1e9:.2f} Gwei) exceeds your "
                    f"maxFeePerGas ({self.max_fee_per_gas} Gwei)"
                )
        else:
            max_fee_wei = int((base_fee + priority_fee_wei) * 1.2)

        return {
            "maxFeePerGas": max_fee_wei,
            "maxPriorityFeePerGas": priority_fee_wei,
        }
