"""Path management utilities for dapp-deploy."""

from pathlib import Path
from typing import Optional, Union

from .constants import ABI_EXTENSION, BIN_EXTENSION, CONTRACT_PLACEHOLDER, REGISTRY_EXTENSION


def get_artifact_paths(input_dir: Union[Path, str], contract_name: str) -> tuple[Path, Path]:
    """
    Get compiled artifact file paths for a contract.

    Args:
        input_dir: Directory holding "dapp build" output
        contract_name: Contract name

    Returns:
        Tuple of (bytecode_path, abi_path)
    """
    input_dir = Path(input_dir)
    return (
        input_dir / f"{contract_name}.{BIN_EXTENSION}",
        input_dir / f"{contract_name}.{ABI_EXTENSION}",
    )


def get_registry_path(
    contract_name: str,
    output_dir: Union[Path, str],
    output_pattern: Optional[str] = None,
) -> Path:
    """
    Get the deployment registry file path for a contract.

    Args:
        contract_name: Contract name
        output_dir: Directory used when no pattern is given
        output_pattern: Path pattern containing "{{contract}}"

    Returns:
        Pattern with its first placeholder replaced by the contract name,
        or <output_dir>/<contract_name>.deployed
    """
    if output_pattern:
        return Path(output_pattern.replace(CONTRACT_PLACEHOLDER, contract_name, 1)).expanduser()

    return Path(output_dir).expanduser() / f"{contract_name}.{REGISTRY_EXTENSION}"
