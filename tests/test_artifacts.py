"""Tests for artifact loading and library linking."""

import json
from unittest.mock import MagicMock

import pytest

from amm_broker.contracts.artifacts import Artifact, deploy_artifact, find_artifact, load_artifact
from amm_broker.core.exceptions import ArtifactError

LIBRARY = "0x1111111111111111111111111111111111111111"
HARDHAT_PLACEHOLDER = "__$a1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4e5$__"


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def hardhat_artifact():
    return Artifact.from_json(
        {
            "contractName": "NonfungibleTokenPositionDescriptor",
            "abi": [],
            "bytecode": "0x6000" + HARDHAT_PLACEHOLDER + "6000",
            "linkReferences": {
                "contracts/libraries/NFTDescriptor.sol": {
                    "NFTDescriptor": [{"start": 2, "length": 20}],
                }
            },
        }
    )


class TestArtifactFormats:
    """hardhat, truffle and waffle JSON layouts."""

    def test_hardhat(self, hardhat_artifact):
        assert hardhat_artifact.name == "NonfungibleTokenPositionDescriptor"
        assert hardhat_artifact.unlinked_libraries == ["NFTDescriptor"]

    def test_waffle_bytecode_object(self):
        """evm.bytecode.object without a 0x prefix."""
        artifact = Artifact.from_json({"abi": [], "evm": {"bytecode": {"object": "6080"}}}, name="WETH9")
        assert artifact.bytecode == "0x6080"
        assert artifact.unlinked_libraries == []

    def test_truffle_unlinked_binary(self):
        artifact = Artifact.from_json({"contractName": "Store", "abi": [], "unlinked_binary": "0x6080"})
        assert artifact.name == "Store"
        assert artifact.bytecode == "0x6080"

    def test_missing_abi(self):
        with pytest.raises(ArtifactError):
            Artifact.from_json({"bytecode": "0x6080"}, name="Broken")


class TestLinking:
    """Writing library addresses into bytecode."""

    def test_link_by_offsets(self, hardhat_artifact):
        """linkReferences offsets are replaced with the lowercase address."""
        linked = hardhat_artifact.link({"NFTDescriptor": LIBRARY})
        assert linked.bytecode == "0x6000" + LIBRARY[2:] + "6000"
        assert linked.unlinked_libraries == []
        assert hardhat_artifact.unlinked_libraries == ["NFTDescriptor"]

    def test_link_unrelated_library(self, hardhat_artifact):
        """Libraries the artifact does not reference leave it unlinked."""
        linked = hardhat_artifact.link({"Other": LIBRARY})
        assert linked.unlinked_libraries == ["NFTDescriptor"]

    def test_truffle_placeholder(self):
        """__Name padded to 40 characters is replaced in place."""
        placeholder = "__NFTDescriptor".ljust(40, "_")
        artifact = Artifact.from_json({"abi": [], "bytecode": "0x6000" + placeholder + "6000"}, name="Descriptor")
        assert artifact.unlinked_libraries == ["NFTDescriptor"]

        linked = artifact.link({"NFTDescriptor": LIBRARY})
        assert linked.bytecode == "0x6000" + LIBRARY[2:] + "6000"
        assert linked.unlinked_libraries == []

    def test_deploy_refuses_unlinked(self, hardhat_artifact):
        """Deploying with a placeholder left is an error, nothing is sent."""
        manager = MagicMock()
        with pytest.raises(ArtifactError):
            deploy_artifact(manager, hardhat_artifact)
        manager.w3.eth.contract.assert_not_called()

    def test_deploy_links_then_sends(self, hardhat_artifact):
        """Libraries passed to deploy_artifact are linked before sending."""
        manager = MagicMock()
        tx_builder = MagicMock()
        tx_builder.build_and_send.return_value = MagicMock(contractAddress=LIBRARY)

        _, receipt = deploy_artifact(
            manager, hardhat_artifact, "0xarg", libraries={"NFTDescriptor": LIBRARY}, tx_builder=tx_builder
        )

        assert receipt.contractAddress == LIBRARY
        bytecode = manager.w3.eth.contract.call_args_list[0].kwargs["bytecode"]
        assert bytecode == "0x6000" + LIBRARY[2:] + "6000"
        manager.w3.eth.contract.return_value.constructor.assert_called_once_with("0xarg")


class TestArtifactLookup:
    """Searching an artifacts directory."""

    def test_prefers_shallowest_match(self, tmp_path):
        write_json(tmp_path / "nested" / "deeper" / "Store.json", {"abi": [], "bytecode": "0x01"})
        shallow = write_json(tmp_path / "contracts" / "Store.json", {"abi": [], "bytecode": "0x02"})

        assert find_artifact("Store", tmp_path) == shallow
        assert load_artifact("Store", tmp_path).bytecode == "0x02"

    def test_not_found(self, tmp_path):
        with pytest.raises(ArtifactError):
            find_artifact("Missing", tmp_path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ArtifactError):
            find_artifact("Store", tmp_path / "nope")

    def test_env_directory(self, tmp_path, monkeypatch):
        """AMM_ARTIFACTS_DIR is the default search root."""
        write_json(tmp_path / "WETH9.json", {"abi": [], "bytecode": "0x03"})
        monkeypatch.setenv("AMM_ARTIFACTS_DIR", str(tmp_path))

        assert load_artifact("WETH9").name == "WETH9"
