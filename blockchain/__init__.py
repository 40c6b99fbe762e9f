"""
Blockchain Interaction Package
Handles contract compilation, deployment transactions, and confirmation
"""

from .contract_factory import ContractFactory, DeployedContract, PendingDeployment, get_contract_factory
from .transaction_builder import TransactionBuilder
from .exceptions import (
    DeployError,
    ContractArtifactError,
    DeploymentFailedError,
    NetworkConfigError,
    InsufficientFundsError
)

__all__ = [
    'ContractFactory',
    'DeployedContract',
    'PendingDeployment',
    'get_contract_factory',
    'TransactionBuilder',
    'DeployError',
    'ContractArtifactError',
    'DeploymentFailedError',
    'NetworkConfigError',
    'InsufficientFundsError'
]
