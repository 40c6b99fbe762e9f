"""
Artifact Writer
Persists the deployed contract's address and ABI for the mobile app
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
from loguru import logger


@dataclass(frozen=True)
class DeploymentArtifact:
    """Address and interface of a confirmed deployment"""

    address: str
    abi: Any

    @classmethod
    def from_contract(cls, contract, abi_format: str = "string") -> "DeploymentArtifact":
        """Build from a DeployedContract; the address is copied verbatim"""
        return cls(address=contract.address, abi=contract.interface(abi_format))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'address': self.address,
            'abi': self.abi
        }

    def to_json(self) -> str:
        # Same layout as JSON.stringify(info, null, 2): no trailing newline
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


def write_artifact(artifact: DeploymentArtifact, output_path: Path) -> Path:
    """
    Write the artifact as JSON, replacing any previous file

    Args:
        artifact: DeploymentArtifact to persist
        output_path: Target file; missing parent directories are created

    Returns:
        Path written
    """
    output_path = Path(output_path)
    output_dir = output_path.parent

    if not output_dir.exists():
        logger.info(f"Creating output directory: {output_dir}")
        output_dir.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(artifact.to_json())

    logger.success(f"Contract info saved to {output_path}")
    return output_path
