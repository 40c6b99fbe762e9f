"""
Deployer
Deploys the configured contract and writes its address and ABI for the
mobile app
"""

from typing import Optional
from web3 import Web3
from loguru import logger

from blockchain.contract_factory import get_contract_factory, load_contract_definition
from blockchain.transaction_builder import TransactionBuilder
from utils.artifact_writer import DeploymentArtifact, write_artifact
from utils.rpc_manager import RPCManager
from .config import DeployConfig
from .wallet_manager import WalletManager


class Deployer:
    """
    Runs one deployment: factory -> deploy -> confirm -> write artifact
    """

    def __init__(
        self,
        config: DeployConfig,
        w3: Optional[Web3] = None,
        wallet_manager: Optional[WalletManager] = None
    ):
        """
        Initialize Deployer

        Args:
            config: Deployment configuration
            w3: Web3 instance (connected via RPCManager if None)
            wallet_manager: Deploying account (derived from the network config if None)
        """
        self.config = config
        self.network = config.get_network()
        self.w3 = w3
        self.wallet_manager = wallet_manager

    def _connect(self):
        if self.w3 is None:
            rpc_manager = RPCManager(self.config.networks)
            self.w3 = rpc_manager.get_web3(self.network.key)

        if self.wallet_manager is None:
            self.wallet_manager = WalletManager(self.w3, self.network.resolve_private_key())

    async def run(self) -> DeploymentArtifact:
        """
        Deploy the contract and persist its connection metadata

        Returns:
            The DeploymentArtifact that was written
        """
        contract_name = self.config.contract_name
        logger.info(f"Deploying {contract_name} contract to {self.network.name}...")

        definition = load_contract_definition(
            contract_name,
            self.config.artifacts_dir,
            sources_dir=self.config.sources_dir,
            solc_version=self.config.solc_version
        )

        self._connect()
        self.wallet_manager.ensure_balance(self.config.min_balance_eth)

        transaction_builder = TransactionBuilder(
            self.w3,
            self.wallet_manager,
            chain_id=self.network.chain_id,
            gas_buffer=self.config.gas_buffer,
            default_gas_limit=self.config.default_gas_limit
        )

        factory = get_contract_factory(
            self.w3,
            contract_name,
            self.wallet_manager,
            transaction_builder=transaction_builder,
            definition=definition
        )

        pending = await factory.deploy()
        contract = await pending.deployed(timeout=self.config.confirmation_timeout)

        logger.success(f"{contract_name} deployed to: {contract.address}")
        logger.info(f"Transaction hash: {contract.transaction_hash}")
        if contract.gas_used is not None:
            logger.info(f"Gas used: {contract.gas_used}")

        artifact = DeploymentArtifact.from_contract(contract, self.config.abi_format)
        write_artifact(artifact, self.config.output_path)

        return artifact
