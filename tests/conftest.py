"""Pytest configuration and fixtures."""

from functools import partial
from unittest.mock import MagicMock

import pytest
import structlog
from web3 import Web3

from amm_broker.core.connection import Web3Manager

from tests.helpers import DEPLOYER, TRADER


@pytest.fixture
def manager() -> MagicMock:
    """Web3Manager stand-in: real checksumming, no node."""
    mock = MagicMock()
    mock.address = DEPLOYER
    mock.chain_id = 31337
    mock.checksum.side_effect = Web3.to_checksum_address
    mock.signer_for.return_value = None
    mock.get_named_accounts.return_value = {"deployer": DEPLOYER, "trader": TRADER}
    mock.get_named_account.side_effect = partial(Web3Manager.get_named_account, mock)
    return mock


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep network and log level overrides out of the tests."""
    monkeypatch.delenv("AMM_NETWORK", raising=False)
    monkeypatch.delenv("AMM_LOG_LEVEL", raising=False)
    monkeypatch.delenv("AMM_ARTIFACTS_DIR", raising=False)
    monkeypatch.delenv("AMM_DEPLOYMENTS_DIR", raising=False)
    yield
    # the CLI binds structlog to the captured stderr of the test that ran it
    structlog.reset_defaults()
