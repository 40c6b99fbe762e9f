"""
Utilities Package
RPC connection management and deployment artifact output
"""

from .rpc_manager import RPCManager
from .artifact_writer import DeploymentArtifact, write_artifact

__all__ = [
    'RPCManager',
    'DeploymentArtifact',
    'write_artifact'
]
