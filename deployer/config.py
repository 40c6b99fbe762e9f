"""
Deployment Configuration
Loads config/deploy_config.json and config/networks.json, then applies
environment overrides (.env is loaded on import)
"""

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
from loguru import logger
from dotenv import load_dotenv

from blockchain.exceptions import NetworkConfigError

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "deploy_config.json"
DEFAULT_NETWORKS_PATH = PROJECT_ROOT / "config" / "networks.json"

ABI_FORMATS = ("string", "json")


@dataclass
class NetworkConfig:
    """Connection settings for one target chain"""

    key: str
    name: str
    http_url: Optional[str] = None
    http_url_env: Optional[str] = None
    chain_id: Optional[int] = None
    private_key_env: Optional[str] = None

    def resolve_http_url(self) -> str:
        """Return the RPC URL, reading it from the environment if needed"""
        if self.http_url_env:
            url = os.getenv(self.http_url_env)
            if not url:
                raise NetworkConfigError(
                    f"{self.http_url_env} must be set to deploy to '{self.key}'"
                )
            return url

        if not self.http_url:
            raise NetworkConfigError(f"No RPC URL configured for network '{self.key}'")

        return self.http_url

    def resolve_private_key(self) -> Optional[str]:
        """Private key for signing, or None to use the node's unlocked account"""
        if not self.private_key_env:
            return None
        return os.getenv(self.private_key_env) or None


@dataclass
class DeployConfig:
    """Deployment settings: contract, paths, output format, gas, networks"""

    contract_name: str = "SpaceVerse"
    network: str = "localhost"
    artifacts_dir: Path = PROJECT_ROOT / "artifacts"
    sources_dir: Path = PROJECT_ROOT / "contracts"
    output_dir: Path = PROJECT_ROOT.parent / "spaceverse" / "assets" / "contracts"
    abi_format: str = "string"
    solc_version: str = "0.8.20"
    confirmation_timeout: float = 120
    gas_buffer: float = 1.2
    default_gas_limit: int = 3000000
    min_balance_eth: float = 0
    networks: Dict[str, NetworkConfig] = field(default_factory=dict)

    @property
    def output_path(self) -> Path:
        """File the mobile app loads: <output_dir>/<contract_name>.json"""
        return self.output_dir / f"{self.contract_name}.json"

    def get_network(self, key: Optional[str] = None) -> NetworkConfig:
        key = key or self.network
        if key not in self.networks:
            available = ", ".join(sorted(self.networks)) or "none"
            raise NetworkConfigError(f"Unknown network '{key}' (available: {available})")
        return self.networks[key]


def _resolve_dir(value: str, root: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()


def load_networks(networks_path: Path = DEFAULT_NETWORKS_PATH) -> Dict[str, NetworkConfig]:
    """
    Load network definitions

    Args:
        networks_path: Path to networks.json

    Returns:
        Mapping of network key to NetworkConfig
    """
    with open(networks_path, 'r') as f:
        raw = json.load(f)

    networks = {}
    for key, entry in raw.get('networks', {}).items():
        networks[key] = NetworkConfig(
            key=key,
            name=entry.get('name', key),
            http_url=entry.get('http_url'),
            http_url_env=entry.get('http_url_env'),
            chain_id=entry.get('chain_id'),
            private_key_env=entry.get('private_key_env')
        )

    return networks


def load_config(
    config_path: Optional[Path] = None,
    networks_path: Optional[Path] = None,
    root: Path = PROJECT_ROOT
) -> DeployConfig:
    """
    Build the deployment configuration

    Values come from the JSON config file; DEPLOY_* environment variables
    take precedence. Relative directories resolve against the project root.

    Args:
        config_path: deploy_config.json location (DEPLOY_CONFIG_PATH env if unset)
        networks_path: networks.json location
        root: Base directory for relative paths

    Returns:
        DeployConfig
    """
    config_path = Path(config_path or os.getenv('DEPLOY_CONFIG_PATH') or DEFAULT_CONFIG_PATH)
    networks_path = Path(networks_path or DEFAULT_NETWORKS_PATH)

    with open(config_path, 'r') as f:
        raw = json.load(f)

    gas_settings = raw.get('gas_settings', {})

    output_dir = os.getenv('DEPLOY_OUTPUT_DIR') or raw.get('output_dir', '../spaceverse/assets/contracts')
    abi_format = os.getenv('DEPLOY_ABI_FORMAT') or raw.get('abi_format', 'string')
    timeout = os.getenv('DEPLOY_CONFIRMATION_TIMEOUT') or raw.get('confirmation_timeout', 120)

    if abi_format not in ABI_FORMATS:
        raise ValueError(f"Invalid abi_format: {abi_format} (expected one of {ABI_FORMATS})")

    config = DeployConfig(
        contract_name=os.getenv('DEPLOY_CONTRACT_NAME') or raw.get('contract_name', 'SpaceVerse'),
        network=os.getenv('DEPLOY_NETWORK') or raw.get('network', 'localhost'),
        artifacts_dir=_resolve_dir(raw.get('artifacts_dir', 'artifacts'), root),
        sources_dir=_resolve_dir(raw.get('sources_dir', 'contracts'), root),
        output_dir=_resolve_dir(output_dir, root),
        abi_format=abi_format,
        solc_version=raw.get('solc_version', '0.8.20'),
        confirmation_timeout=float(timeout),
        gas_buffer=float(gas_settings.get('gas_buffer', 1.2)),
        default_gas_limit=int(gas_settings.get('default_gas_limit', 3000000)),
        min_balance_eth=float(raw.get('min_balance_eth', 0)),
        networks=load_networks(networks_path)
    )

    logger.debug(f"Loaded deploy config from {config_path} (network: {config.network})")
    return config
