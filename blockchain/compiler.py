"""
Solidity Compiler
Compiles a contract source with solc when no Hardhat artifact is available
"""

from pathlib import Path
from typing import Dict
from solcx import compile_standard, install_solc, get_installed_solc_versions
from loguru import logger

from .exceptions import ContractArtifactError


def ensure_solc(version: str):
    """Install the requested solc version if it is not present"""
    installed = {str(v) for v in get_installed_solc_versions()}
    if version not in installed:
        logger.info(f"Installing solc {version}...")
        install_solc(version)


def compile_contract(source_path: Path, contract_name: str, solc_version: str) -> Dict:
    """
    Compile one contract from a Solidity source file

    Args:
        source_path: Path to the .sol file
        contract_name: Contract to extract from the compiler output
        solc_version: solc version to compile with

    Returns:
        {'abi': [...], 'bytecode': '0x...'}
    """
    source_path = Path(source_path)
    logger.info(f"Compiling {source_path.name} with solc {solc_version}...")

    ensure_solc(solc_version)

    source = source_path.read_text(encoding='utf-8')
    compiled = compile_standard({
        "language": "Solidity",
        "sources": {
            source_path.name: {"content": source}
        },
        "settings": {
            "optimizer": {"enabled": True, "runs": 200},
            "outputSelection": {
                "*": {
                    "*": ["abi", "evm.bytecode.object"]
                }
            }
        }
    }, solc_version=solc_version, base_path=str(source_path.parent))

    contracts = compiled.get('contracts', {}).get(source_path.name, {})
    if contract_name not in contracts:
        raise ContractArtifactError(
            f"Contract {contract_name} not found in {source_path.name} "
            f"(found: {', '.join(contracts) or 'none'})"
        )

    contract_data = contracts[contract_name]
    bytecode = contract_data['evm']['bytecode']['object']

    return {
        'abi': contract_data['abi'],
        'bytecode': bytecode if bytecode.startswith('0x') else f'0x{bytecode}'
    }
