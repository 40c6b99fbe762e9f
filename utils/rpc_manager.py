"""
RPC Manager
Connects to the network selected for deployment
"""

from typing import Dict
from web3 import Web3
from loguru import logger

from blockchain.exceptions import NetworkConfigError


class RPCManager:
    """
    Resolves a network entry to a connected Web3 instance

    Local networks use a literal URL; remote networks read theirs from the
    environment variable named in config/networks.json.
    """

    def __init__(self, networks: Dict, request_timeout: int = 30):
        """
        Initialize RPC Manager

        Args:
            networks: Mapping of network key to NetworkConfig
            request_timeout: HTTP request timeout in seconds
        """
        self.networks = networks
        self.request_timeout = request_timeout
        self.w3_instances = {}

        logger.info(f"RPC Manager initialized with {len(self.networks)} networks")

    def get_web3(self, network: str) -> Web3:
        """
        Get a connected Web3 instance for a network

        Args:
            network: Network key (e.g. 'localhost', 'amoy')

        Returns:
            Web3 instance

        Raises:
            NetworkConfigError: unknown network, missing URL, or node unreachable
        """
        if network in self.w3_instances:
            return self.w3_instances[network]

        if network not in self.networks:
            available = ", ".join(sorted(self.networks)) or "none"
            raise NetworkConfigError(f"Unknown network '{network}' (available: {available})")

        network_config = self.networks[network]
        http_url = network_config.resolve_http_url()

        w3 = Web3(Web3.HTTPProvider(
            http_url,
            request_kwargs={'timeout': self.request_timeout}
        ))

        if not w3.is_connected():
            raise NetworkConfigError(f"Failed to connect to {network_config.name} ({network})")

        chain_id = w3.eth.chain_id
        if network_config.chain_id is not None and chain_id != network_config.chain_id:
            raise NetworkConfigError(
                f"Chain id mismatch for '{network}': "
                f"node reports {chain_id}, expected {network_config.chain_id}"
            )

        logger.info(f"Connected to {network_config.name} (chain id {chain_id})")

        self.w3_instances[network] = w3
        return w3

