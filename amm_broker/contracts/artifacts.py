"""Compiled contract artifacts: loading, library linking and deployment"""

import json
import re
from dataclasses import dataclass, field, replace
from pathlib import Path

import structlog
from web3 import Web3

from ..core.config import Config
from ..core.exceptions import ArtifactError
from ..utils.transactions import TransactionBuilder

logger = structlog.get_logger()

# truffle style placeholder: __LibraryName padded with underscores to 40 chars
_TRUFFLE_PLACEHOLDER = re.compile(r"__[A-Za-z0-9_$]{38}")


@dataclass
class Artifact:
    """
    ABI and creation bytecode of a compiled contract.

    Understands hardhat artifacts (bytecode + linkReferences), truffle
    artifacts (placeholders inside the bytecode) and waffle builds
    (evm.bytecode.object), which covers the published Uniswap packages.
    """

    name: str
    abi: list
    bytecode: str
    link_references: dict = field(default_factory=dict)
    path: Path = None

    @classmethod
    def from_json(cls, data, name=None, path=None):
        bytecode = data.get("bytecode")
        link_references = data.get("linkReferences") or {}
        evm = data.get("evm") or {}
        if isinstance(bytecode, dict):
            link_references = bytecode.get("linkReferences", link_references)
            bytecode = bytecode.get("object")
        if not bytecode and evm.get("bytecode"):
            link_references = evm["bytecode"].get("linkReferences", link_references)
            bytecode = evm["bytecode"].get("object")
        if not bytecode:
            bytecode = data.get("unlinked_binary")

        if "abi" not in data or bytecode is None:
            raise ArtifactError(f"Artifact {name or path} has no abi/bytecode")

        if not bytecode.startswith("0x"):
            bytecode = "0x" + bytecode

        return cls(
            name=name or data.get("contractName"),
            abi=data["abi"],
            bytecode=bytecode,
            link_references=link_references,
            path=path,
        )

    @property
    def unlinked_libraries(self):
        """Library names still referenced by placeholders"""
        names = set()
        for libraries in self.link_references.values():
            names.update(libraries)
        if not self.link_references:
            names.update(m.group(0).strip("_") for m in _TRUFFLE_PLACEHOLDER.finditer(self.bytecode[2:]))
        return sorted(names)

    def link(self, libraries):
        """
        Return a copy with library addresses written into the bytecode.

        Args:
            libraries: Mapping of library name -> deployed address
        """
        code = self.bytecode[2:]
        remaining = {}

        for source, refs in self.link_references.items():
            for lib_name, offsets in refs.items():
                if lib_name not in libraries:
                    remaining.setdefault(source, {})[lib_name] = offsets
                    continue
                address = Web3.to_checksum_address(libraries[lib_name])[2:].lower()
                for ref in offsets:
                    start = ref["start"] * 2
                    end = start + ref["length"] * 2
                    code = code[:start] + address + code[end:]

        if not self.link_references:
            for lib_name, lib_address in libraries.items():
                address = Web3.to_checksum_address(lib_address)[2:].lower()
                placeholder = ("__" + lib_name).ljust(40, "_")[:40]
                code = code.replace(placeholder, address)

        return replace(self, bytecode="0x" + code, link_references=remaining)


def find_artifact(name, artifacts_dir=None):
    """Search artifacts_dir (default AMM_ARTIFACTS_DIR) recursively for <name>.json"""
    root = Path(artifacts_dir) if artifacts_dir else Config().artifacts_dir
    if not root.exists():
        raise ArtifactError(f"Artifacts directory not found: {root}")

    matches = sorted(root.rglob(f"{name}.json"), key=lambda p: len(p.parts))
    if not matches:
        raise ArtifactError(f"Artifact {name}.json not found under {root}")
    return matches[0]


def load_artifact(name, artifacts_dir=None):
    path = find_artifact(name, artifacts_dir)
    with open(path) as f:
        return Artifact.from_json(json.load(f), name=name, path=path)


def deploy_artifact(manager, artifact, *args, sender=None, libraries=None, tx_builder=None):
    """
    Send the creation transaction for artifact and wait for it.

    Returns:
        (contract, receipt), contract bound to the new address
    """
    if libraries:
        artifact = artifact.link(libraries)
    if artifact.unlinked_libraries:
        raise ArtifactError(
            f"{artifact.name} needs libraries linked first: {artifact.unlinked_libraries}"
        )

    factory = manager.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
    builder = tx_builder or TransactionBuilder(manager)
    receipt = builder.build_and_send(
        factory.constructor(*args), sender=sender, operation_type=f"deploy {artifact.name}"
    )

    address = receipt.contractAddress
    logger.info("contract_deployed", name=artifact.name, address=address)
    return manager.w3.eth.contract(address=address, abi=artifact.abi), receipt


def deploy_contract(manager, name, *args, sender=None, libraries=None, artifacts_dir=None):
    """Load artifact `name` and deploy it with constructor args; returns the contract"""
    artifact = load_artifact(name, artifacts_dir)
    contract, _ = deploy_artifact(manager, artifact, *args, sender=sender, libraries=libraries)
    return contract
