"""
Deployer Package
Contract deployment flow, configuration, and deploying account
"""

from .config import DeployConfig, NetworkConfig, load_config
from .deployer import Deployer
from .wallet_manager import WalletManager

__all__ = ['DeployConfig', 'NetworkConfig', 'load_config', 'Deployer', 'WalletManager']
