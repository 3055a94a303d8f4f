"""
Tag-based deployment scripts with a per-network record of deployed contracts.

Scripts register themselves with @deploy_script and receive a
DeployContext exposing `deployments.deploy(name, from_=..., args=..., log=...)`
and `get_named_account(name)`. Each deployment is written to
<deployments_dir>/<network>/<Name>.json; running the same script again
reuses the recorded address when bytecode and constructor args are unchanged
and the contract still has code on chain.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import structlog
from web3 import Web3

from ..contracts.artifacts import deploy_artifact, load_artifact
from ..core.config import Config
from ..core.exceptions import ArtifactError, DeploymentError

logger = structlog.get_logger()

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# chain id -> network folder name
NETWORK_NAMES = {
    1: "mainnet",
    5: "goerli",
    10: "optimism",
    137: "polygon",
    1337: "localhost",
    31337: "hardhat",
    42161: "arbitrum",
    11155111: "sepolia",
}


@dataclass
class DeployScript:
    """A registered deployment step."""

    name: str
    func: Callable
    tags: Tuple[str, ...]
    order: int = 0


_SCRIPTS: List[DeployScript] = []


def deploy_script(tags, order=0, name=None):
    """
    Register a function as a deployment script.

    Args:
        tags: Tags selecting the script (`amm-broker deploy --tags ...`)
        order: Scripts run in ascending order
        name: Script name (default: function name)
    """
    def decorator(func):
        _SCRIPTS.append(DeployScript(name or func.__name__, func, tuple(tags), order))
        func.tags = tuple(tags)
        return func
    return decorator


def registered_scripts():
    return sorted(_SCRIPTS, key=lambda s: (s.order, s.name))


def _jsonable(value):
    """Constructor args as stored in deployment records"""
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (bytes, bytearray)):
        return Web3.to_hex(value)
    return value


@dataclass
class DeployResult:
    name: str
    address: str
    abi: list
    args: list
    transaction_hash: Optional[str] = None
    newly_deployed: bool = True
    receipt: dict = field(default=None, repr=False)


class Deployments:
    """Deploys artifacts and keeps the per-network deployment records"""

    def __init__(self, manager, network=None, deployments_dir=None, artifacts_dir=None):
        """
        Args:
            manager: Web3Manager instance
            network: Record folder name (default: AMM_NETWORK, else derived
                from the chain id)
            deployments_dir: Root of the records (default: AMM_DEPLOYMENTS_DIR)
            artifacts_dir: Where compiled artifacts are found (default: AMM_ARTIFACTS_DIR)
        """
        self.manager = manager
        config = Config()
        self.network = network or config.network or self._network_from_chain()
        self.root = Path(deployments_dir) if deployments_dir else config.deployments_dir
        self.artifacts_dir = artifacts_dir

    def _network_from_chain(self):
        chain_id = self.manager.chain_id
        return NETWORK_NAMES.get(chain_id, f"chain-{chain_id}")

    @property
    def path(self):
        return self.root / self.network

    def _record_path(self, name):
        return self.path / f"{name}.json"

    def get(self, name):
        """Recorded deployment for name, or None"""
        path = self._record_path(name)
        if not path.exists():
            return None
        with open(path) as f:
            return json.load(f)

    def get_address(self, name):
        record = self.get(name)
        if record is None:
            raise DeploymentError(f"No deployment named {name} on {self.network}")
        return record["address"]

    def all(self):
        """All recorded deployments on this network, by name"""
        if not self.path.exists():
            return {}
        records = {}
        for path in sorted(self.path.glob("*.json")):
            with open(path) as f:
                records[path.stem] = json.load(f)
        return records

    def _save(self, name, record):
        self.path.mkdir(parents=True, exist_ok=True)
        with open(self._record_path(name), "w") as f:
            json.dump(record, f, indent=2)

    def _reusable(self, record, bytecode, args):
        if record is None:
            return False
        if record.get("bytecode") != bytecode or record.get("args") != args:
            return False
        return len(self.manager.w3.eth.get_code(record["address"])) > 0

    def deploy(self, name, from_=None, args=(), libraries=None, log=False, contract=None):
        """
        Deploy artifact `contract` (default: name) and record it under name.

        Args:
            name: Deployment name
            from_: Deployer address (default: manager.address)
            args: Constructor arguments; structs may be given as dicts or tuples
            libraries: Library name -> address to link before deploying
            log: Log the deployment at info level
            contract: Artifact name when it differs from name

        Returns:
            DeployResult
        """
        artifact = load_artifact(contract or name, self.artifacts_dir)
        if libraries:
            artifact = artifact.link(libraries)
        stored_args = _jsonable(list(args))

        existing = self.get(name)
        if self._reusable(existing, artifact.bytecode, stored_args):
            if log:
                logger.info("reusing_deployment", name=name, address=existing["address"])
            return DeployResult(
                name=name,
                address=existing["address"],
                abi=existing["abi"],
                args=existing["args"],
                transaction_hash=existing.get("transactionHash"),
                newly_deployed=False,
            )

        sender = self.manager.checksum(from_ or self.manager.address)
        try:
            deployed, receipt = deploy_artifact(self.manager, artifact, *args, sender=sender)
        except ArtifactError:
            raise
        except Exception as e:
            raise DeploymentError(f"Deploying {name} failed: {e}") from e

        tx_hash = Web3.to_hex(receipt.transactionHash)
        record = {
            "address": deployed.address,
            "abi": artifact.abi,
            "bytecode": artifact.bytecode,
            "args": stored_args,
            "transactionHash": tx_hash,
            "receipt": {
                "from": sender,
                "blockNumber": receipt.blockNumber,
                "gasUsed": receipt.gasUsed,
            },
        }
        if libraries:
            record["libraries"] = dict(libraries)
        self._save(name, record)

        if log:
            logger.info(
                "deployed",
                name=name,
                address=deployed.address,
                tx_hash=tx_hash,
                gas_used=receipt.gasUsed,
            )
        return DeployResult(
            name=name,
            address=deployed.address,
            abi=artifact.abi,
            args=stored_args,
            transaction_hash=tx_hash,
            newly_deployed=True,
            receipt=receipt,
        )


@dataclass
class DeployContext:
    """What a deployment script gets to work with."""

    manager: object
    deployments: Deployments

    def get_named_account(self, name):
        """Address of a named account; ConfigError when it is not available"""
        return self.manager.get_named_account(name)


def run_deploy_scripts(manager, tags=None, deployments=None):
    """
    Run registered scripts whose tags intersect `tags` (all scripts if None).

    Returns:
        Names of the scripts that ran, in order

    Raises:
        DeploymentError: If a requested tag matches no script
    """
    # scripts register on import
    from . import scripts  # noqa: F401

    available = registered_scripts()
    if tags:
        known = {tag for script in available for tag in script.tags}
        unknown = sorted(set(tags) - known)
        if unknown:
            raise DeploymentError(f"Unknown deploy tags: {unknown}. Available: {sorted(known)}")
        selected = [s for s in available if set(s.tags) & set(tags)]
    else:
        selected = available

    context = DeployContext(manager, deployments or Deployments(manager))
    ran = []
    for script in selected:
        logger.info("running_deploy_script", script=script.name, tags=list(script.tags))
        script.func(context)
        ran.append(script.name)
    return ran
