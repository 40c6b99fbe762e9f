"""
Shared fixtures: sample contract definition, Hardhat-style artifact tree,
mocked Web3 and deploying account
"""

import json
import pytest
from unittest.mock import MagicMock, Mock

from deployer.config import DeployConfig, NetworkConfig


SAMPLE_ABI = [
    {
        "inputs": [],
        "stateMutability": "nonpayable",
        "type": "constructor"
    },
    {
        "inputs": [{"internalType": "string", "name": "name", "type": "string"}],
        "name": "createPlanet",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "uint256", "name": "planetId", "type": "uint256"},
            {"indexed": False, "internalType": "address", "name": "owner", "type": "address"}
        ],
        "name": "PlanetCreated",
        "type": "event"
    }
]

SAMPLE_BYTECODE = "0x6080604052348015600f57600080fd5b50603f80601d6000396000f3fe"

DEPLOYED_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

TX_HASH = bytes.fromhex("ab" * 32)


@pytest.fixture
def sample_abi():
    return SAMPLE_ABI


@pytest.fixture
def artifacts_dir(tmp_path):
    """Hardhat layout: artifacts/contracts/SpaceVerse.sol/SpaceVerse.json"""
    contract_dir = tmp_path / "artifacts" / "contracts" / "SpaceVerse.sol"
    contract_dir.mkdir(parents=True)

    (contract_dir / "SpaceVerse.json").write_text(json.dumps({
        "_format": "hh-sol-artifact-1",
        "contractName": "SpaceVerse",
        "sourceName": "contracts/SpaceVerse.sol",
        "abi": SAMPLE_ABI,
        "bytecode": SAMPLE_BYTECODE,
        "deployedBytecode": "0x6080"
    }))
    (contract_dir / "SpaceVerse.dbg.json").write_text(json.dumps({
        "_format": "hh-sol-dbg-1",
        "buildInfo": "../../build-info/abc.json"
    }))

    return tmp_path / "artifacts"


@pytest.fixture
def receipt():
    return {
        'status': 1,
        'contractAddress': DEPLOYED_ADDRESS,
        'blockNumber': 1,
        'gasUsed': 412345,
        'transactionHash': TX_HASH
    }


@pytest.fixture
def w3(receipt):
    """Mock Web3 instance whose deployment confirms with `receipt`"""
    w3 = MagicMock()
    w3.eth.contract.return_value.constructor.return_value.transact.return_value = TX_HASH
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = receipt
    w3.eth.chain_id = 31337
    return w3


@pytest.fixture
def node_wallet():
    """Node-managed (unlocked) deploying account"""
    wallet = Mock()
    wallet.can_sign = False
    wallet.address = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
    return wallet


@pytest.fixture
def networks():
    return {
        'localhost': NetworkConfig(
            key='localhost',
            name='Local Hardhat node',
            http_url='http://127.0.0.1:8545',
            chain_id=31337
        )
    }


@pytest.fixture
def deploy_config(tmp_path, artifacts_dir, networks):
    return DeployConfig(
        contract_name="SpaceVerse",
        network="localhost",
        artifacts_dir=artifacts_dir,
        sources_dir=tmp_path / "contracts",
        output_dir=tmp_path / "spaceverse" / "assets" / "contracts",
        abi_format="json",
        networks=networks
    )
