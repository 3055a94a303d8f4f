"""Custom exceptions for AMM Broker"""


class AMMError(Exception):
    """Base exception for all AMM errors"""
    pass


class ConfigError(AMMError):
    """Configuration-related errors"""
    pass


class ConnectionError(AMMError):
    """Web3 connection errors"""
    pass


class TransactionError(AMMError):
    """Transaction mined but reverted (receipt status != 1)"""
    pass


class InvalidInputError(AMMError):
    """Non-positive reserves or prices, out-of-range sqrt prices"""
    pass


class PoolError(AMMError):
    """Pool-related errors (pair not created, pool not initialized, etc.)"""
    pass


class ArtifactError(AMMError):
    """Compiled contract artifact missing, malformed or not fully linked"""
    pass


class DeploymentError(AMMError):
    """Deployment script or registry errors"""
    pass
