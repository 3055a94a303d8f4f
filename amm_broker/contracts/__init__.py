"""Contract wrappers for ERC20 tokens and compiled artifacts"""

from .erc20 import ERC20, ExpandedERC20
from .artifacts import Artifact, load_artifact, deploy_artifact, deploy_contract

__all__ = ["ERC20", "ExpandedERC20", "Artifact", "load_artifact", "deploy_artifact", "deploy_contract"]
