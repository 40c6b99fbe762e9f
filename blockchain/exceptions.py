"""
Deployment Errors
Raised at the seams of the deployment flow and handled once by the runner
"""

from typing import Optional


class DeployError(Exception):
    """Base class for deployment tool errors"""


class ContractArtifactError(DeployError):
    """Compiled contract definition missing or unusable"""


class DeploymentFailedError(DeployError):
    """Deployment transaction was mined but did not create a contract"""

    def __init__(self, message: str, transaction_hash: Optional[str] = None):
        super().__init__(message)
        self.transaction_hash = transaction_hash


class NetworkConfigError(DeployError):
    """Unknown network, missing RPC URL, or unreachable node"""


class InsufficientFundsError(DeployError):
    """Deploying account balance below the configured minimum"""
