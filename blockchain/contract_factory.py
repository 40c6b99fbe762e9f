"""
Contract Factory
Binds a compiled contract definition to a deploying account and drives
deployment through to on-chain confirmation
"""

import json
import asyncio
from pathlib import Path
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from .compiler import compile_contract
from .exceptions import ContractArtifactError, DeploymentFailedError
from .transaction_builder import TransactionBuilder


def find_artifact(artifacts_dir: Path, contract_name: str) -> Optional[Path]:
    """
    Locate a Hardhat artifact: <artifacts_dir>/**/<Name>.sol/<Name>.json

    Debug files (<Name>.dbg.json) are ignored.
    """
    artifacts_dir = Path(artifacts_dir)
    if not artifacts_dir.is_dir():
        return None

    matches = sorted(
        path for path in artifacts_dir.rglob(f"{contract_name}.json")
        if path.parent.name == f"{contract_name}.sol"
    )
    return matches[0] if matches else None


def find_source(sources_dir: Path, contract_name: str) -> Optional[Path]:
    """Locate <sources_dir>/**/<Name>.sol"""
    sources_dir = Path(sources_dir)
    if not sources_dir.is_dir():
        return None

    matches = sorted(sources_dir.rglob(f"{contract_name}.sol"))
    return matches[0] if matches else None


def load_artifact(artifact_path: Path) -> Dict:
    """Read abi and bytecode from a Hardhat artifact file"""
    with open(artifact_path, 'r', encoding='utf-8') as f:
        contract_json = json.load(f)

    if 'abi' not in contract_json or 'bytecode' not in contract_json:
        raise ContractArtifactError(f"Artifact {artifact_path} has no abi/bytecode")

    return {
        'abi': contract_json['abi'],
        'bytecode': contract_json['bytecode']
    }


def load_contract_definition(
    contract_name: str,
    artifacts_dir: Path,
    sources_dir: Optional[Path] = None,
    solc_version: str = "0.8.20"
) -> Dict:
    """
    Resolve a contract's compiled definition without touching the network

    Hardhat artifacts are preferred; the Solidity source is compiled only
    when no artifact exists.

    Args:
        contract_name: Contract name (file and contract share it)
        artifacts_dir: Hardhat artifacts directory
        sources_dir: Directory holding .sol sources
        solc_version: solc version for source compilation

    Returns:
        {'abi': [...], 'bytecode': '0x...'}

    Raises:
        ContractArtifactError: no usable compiled definition
    """
    artifact_path = find_artifact(artifacts_dir, contract_name)

    if artifact_path is not None:
        logger.info(f"Loading artifact: {artifact_path}")
        definition = load_artifact(artifact_path)
    else:
        source_path = find_source(sources_dir, contract_name) if sources_dir else None
        if source_path is None:
            raise ContractArtifactError(
                f"Contract artifact not found for {contract_name} in {artifacts_dir}. "
                f"Run 'npx hardhat compile' first or add {contract_name}.sol to the sources directory"
            )
        definition = compile_contract(source_path, contract_name, solc_version)

    bytecode = definition['bytecode']
    if not bytecode or bytecode in ('0x', '0x0'):
        raise ContractArtifactError(
            f"{contract_name} has no bytecode (abstract contract or interface?)"
        )

    return definition


def get_contract_factory(
    w3: Web3,
    contract_name: str,
    wallet_manager,
    artifacts_dir: Optional[Path] = None,
    sources_dir: Optional[Path] = None,
    solc_version: str = "0.8.20",
    transaction_builder: Optional[TransactionBuilder] = None,
    definition: Optional[Dict] = None
) -> "ContractFactory":
    """
    Get a factory bound to a contract's compiled definition

    Args:
        w3: Web3 instance
        contract_name: Contract name
        wallet_manager: Deploying account
        artifacts_dir: Hardhat artifacts directory
        sources_dir: Directory holding .sol sources
        solc_version: solc version for source compilation
        transaction_builder: Builder for locally signed deployments
        definition: Already resolved definition (skips the lookup)

    Returns:
        ContractFactory
    """
    if definition is None:
        definition = load_contract_definition(contract_name, artifacts_dir, sources_dir, solc_version)

    return ContractFactory(
        w3,
        contract_name,
        definition['abi'],
        definition['bytecode'],
        wallet_manager,
        transaction_builder
    )


class ContractFactory:
    """
    Deploys one compiled contract from the configured account
    """

    def __init__(
        self,
        w3: Web3,
        contract_name: str,
        abi: List[Dict],
        bytecode: str,
        wallet_manager,
        transaction_builder: Optional[TransactionBuilder] = None
    ):
        self.w3 = w3
        self.contract_name = contract_name
        self.abi = abi
        self.bytecode = bytecode
        self.wallet_manager = wallet_manager
        self.transaction_builder = transaction_builder or TransactionBuilder(w3, wallet_manager)

    async def deploy(self, *constructor_args) -> "PendingDeployment":
        """
        Submit the deployment transaction

        Args:
            *constructor_args: Contract constructor arguments

        Returns:
            PendingDeployment for the submitted transaction
        """
        contract = self.w3.eth.contract(abi=self.abi, bytecode=self.bytecode)
        constructor = contract.constructor(*constructor_args)

        if self.wallet_manager.can_sign:
            logger.info("Building deployment transaction...")
            transaction = self.transaction_builder.build_deploy_tx(constructor)

            logger.info("Signing transaction...")
            signed_tx = self.wallet_manager.sign_transaction(transaction)

            logger.info("Sending deployment transaction...")
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        else:
            logger.info("Sending deployment transaction from node account...")
            tx_hash = constructor.transact({'from': self.wallet_manager.address})

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
        return PendingDeployment(self.w3, self.contract_name, self.abi, tx_hash)


class PendingDeployment:
    """
    A submitted deployment awaiting confirmation
    """

    def __init__(self, w3: Web3, contract_name: str, abi: List[Dict], tx_hash):
        self.w3 = w3
        self.contract_name = contract_name
        self.abi = abi
        self.tx_hash = tx_hash

    async def deployed(self, timeout: float = 120) -> "DeployedContract":
        """
        Wait until the deployment transaction is mined

        The receipt poll runs in a worker thread so the event loop stays free.

        Args:
            timeout: Seconds to wait before web3 raises TimeExhausted

        Returns:
            DeployedContract

        Raises:
            DeploymentFailedError: transaction reverted or created no contract
        """
        tx_hash_hex = Web3.to_hex(self.tx_hash)
        logger.info("Waiting for confirmation...")

        receipt = await asyncio.to_thread(
            self.w3.eth.wait_for_transaction_receipt,
            self.tx_hash,
            timeout=timeout
        )

        if receipt['status'] != 1:
            raise DeploymentFailedError(
                f"Deployment of {self.contract_name} reverted (tx {tx_hash_hex})",
                transaction_hash=tx_hash_hex
            )

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise DeploymentFailedError(
                f"Receipt for {tx_hash_hex} carries no contract address",
                transaction_hash=tx_hash_hex
            )

        return DeployedContract(
            address=contract_address,
            abi=self.abi,
            transaction_hash=tx_hash_hex,
            block_number=receipt.get('blockNumber'),
            gas_used=receipt.get('gasUsed')
        )


class DeployedContract:
    """
    Confirmed on-chain contract: address and interface
    """

    def __init__(
        self,
        address: str,
        abi: List[Dict],
        transaction_hash: Optional[str] = None,
        block_number: Optional[int] = None,
        gas_used: Optional[int] = None
    ):
        self.address = address
        self.abi = abi
        self.transaction_hash = transaction_hash
        self.block_number = block_number
        self.gas_used = gas_used

    def interface(self, abi_format: str = "string"):
        """
        Interface schema in the requested format

        'string' gives the raw compiler ABI as compact JSON text; 'json' gives
        the ABI list itself.
        """
        if abi_format == "json":
            return self.abi
        if abi_format == "string":
            return json.dumps(self.abi, separators=(',', ':'), ensure_ascii=False)
        raise ValueError(f"Invalid abi_format: {abi_format}")
