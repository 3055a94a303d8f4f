"""Core module - configuration, connection, logging and exceptions"""

from .config import Config
from .connection import Web3Manager
from .exceptions import (
    AMMError,
    ConfigError,
    ConnectionError,
    TransactionError,
    InvalidInputError,
    PoolError,
    ArtifactError,
    DeploymentError,
)
from .logging import configure_logging

__all__ = [
    "Config",
    "Web3Manager",
    "AMMError",
    "ConfigError",
    "ConnectionError",
    "TransactionError",
    "InvalidInputError",
    "PoolError",
    "ArtifactError",
    "DeploymentError",
    "configure_logging",
]
