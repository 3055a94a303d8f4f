"""Configuration loading and management"""

import os
import json
from pathlib import Path
from .exceptions import ConfigError


class Config:
    """Centralized configuration manager for shared settings"""

    _instance = None
    _abis = None

    # Shared ABIs are inside the package (not user-configurable)
    PACKAGE_ABIS = Path(__file__).parent.parent / "abis.json"

    # Protocol ABI files, looked up by name prefix
    PROTOCOL_ABIS = {
        "uniswap_v2_": Path(__file__).parent.parent / "protocols" / "uniswap_v2" / "abis.json",
        "uniswap_v3_": Path(__file__).parent.parent / "protocols" / "uniswap_v3" / "abis.json",
    }

    DEFAULT_NAMED_ACCOUNTS = {"deployer": 0, "trader": 1}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Config._abis is None:
            self._load()

    def _load(self):
        """Load shared and protocol ABIs from the package"""
        if not self.PACKAGE_ABIS.exists():
            raise ConfigError(f"Shared ABIs not found: {self.PACKAGE_ABIS}")
        with open(self.PACKAGE_ABIS) as f:
            abis = json.load(f)

        for prefix, path in self.PROTOCOL_ABIS.items():
            if not path.exists():
                raise ConfigError(f"Protocol ABIs not found: {path}")
            with open(path) as f:
                for name, abi in json.load(f).items():
                    abis[prefix + name] = abi

        Config._abis = abis

    def _find_config_dir(self):
        """Find optional user config directory (None if there is none)"""
        env_path = os.getenv("AMM_CONFIG_DIR")
        if env_path:
            path = Path(env_path)
            if path.exists():
                return path
            raise ConfigError(f"AMM_CONFIG_DIR does not exist: {env_path}")

        locations = [
            Path.cwd() / "config",
            Path.home() / ".amm-broker" / "config",
        ]
        for path in locations:
            if path.exists():
                return path
        return None

    def get_abi(self, name):
        """
        Get ABI by name.

        Shared ABIs use plain names ("erc20"); protocol ABIs are prefixed
        ("uniswap_v2_router", "uniswap_v3_pool").
        """
        if name in Config._abis:
            return Config._abis[name]
        raise ConfigError(f"ABI not found: {name}")

    @property
    def artifacts_dir(self):
        """Directory holding compiled contract artifacts (AMM_ARTIFACTS_DIR)"""
        env_path = os.getenv("AMM_ARTIFACTS_DIR")
        if env_path:
            return Path(env_path)
        config_dir = self._find_config_dir()
        if config_dir and (config_dir / "artifacts").exists():
            return config_dir / "artifacts"
        return Path.cwd() / "artifacts"

    @property
    def deployments_dir(self):
        """Where deployment records are written (AMM_DEPLOYMENTS_DIR)"""
        return Path(os.getenv("AMM_DEPLOYMENTS_DIR", Path.cwd() / "deployments"))

    @property
    def network(self):
        """Network name override for deployment records (AMM_NETWORK)"""
        return os.getenv("AMM_NETWORK")

    @property
    def log_level(self):
        return os.getenv("AMM_LOG_LEVEL", "INFO").upper()

    @property
    def named_accounts(self):
        """
        Named account -> index mapping.

        Read from named_accounts.json in the config directory when present,
        otherwise deployer is account 0 and trader is account 1.
        """
        config_dir = self._find_config_dir()
        if config_dir:
            path = config_dir / "named_accounts.json"
            if path.exists():
                with open(path) as f:
                    return json.load(f)
        return dict(self.DEFAULT_NAMED_ACCOUNTS)
