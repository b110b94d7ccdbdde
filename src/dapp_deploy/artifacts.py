"""Compiled artifact discovery, selection and loading for dapp-deploy."""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .config import DeployConfig
from .constants import ABI_EXTENSION, BIN_EXTENSION
from .exceptions import ArtifactError
from .paths import get_artifact_paths
from .types import Artifact

logger = logging.getLogger(__name__)


def list_artifact_names(directory: Union[Path, str], extension: str) -> List[str]:
    """
    List contract names for files with a given extension.

    Args:
        directory: Directory to scan (not recursive)
        extension: File extension, with or without leading dots

    Returns:
        Sorted list of file stems, e.g. ["Bar", "Foo"] for Bar.bin and Foo.bin

    Raises:
        ArtifactError: If the directory cannot be listed
    """
    suffix = "." + extension.lstrip(".")
    directory = Path(directory)

    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise ArtifactError(f"Unable to list artifacts in {directory}: {e}") from e

    return [
        entry.name[: -len(suffix)]
        for entry in entries
        if entry.name.endswith(suffix) and len(entry.name) > len(suffix)
    ]


def select_artifacts(
    bin_names: Sequence[str],
    abi_names: Iterable[str],
    only: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Pick the contracts to deploy.

    A contract is kept only if both its bytecode and ABI were found. When
    ``only`` is non-empty, contracts whose names are not in it (exact match)
    are dropped as well. Neither case is reported.

    Args:
        bin_names: Names with a bytecode file, in discovery order
        abi_names: Names with an ABI file
        only: Optional allow-list of contract names

    Returns:
        Contract names in discovery order
    """
    abi_set = set(abi_names)
    selected = [name for name in bin_names if name in abi_set]

    allowed = set(only or ())
    if allowed:
        selected = [name for name in selected if name in allowed]

    return selected


def discover_artifacts(config: DeployConfig) -> List[str]:
    """
    Find deployable contracts in the configured input directory.

    Raises:
        ArtifactError: If the input directory cannot be listed
    """
    bin_names = list_artifact_names(config.input_dir, BIN_EXTENSION)
    abi_names = list_artifact_names(config.input_dir, ABI_EXTENSION)
    selected = select_artifacts(bin_names, abi_names, config.contracts)

    logger.debug("Contracts selected from %s: %s", config.input_dir, ", ".join(selected))
    return selected


def load_artifact(input_dir: Union[Path, str], contract_name: str) -> Artifact:
    """
    Read the bytecode and ABI of one contract.

    Args:
        input_dir: Directory holding "dapp build" output
        contract_name: Contract name

    Returns:
        Artifact with 0x-prefixed bytecode and parsed ABI

    Raises:
        ArtifactError: If either file is unreadable or the ABI is not a JSON array of
            objects
    """
    bin_path, abi_path = get_artifact_paths(input_dir, contract_name)

    try:
        bytecode = bin_path.read_text().strip()
        abi_text = abi_path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ArtifactError(f'Unable to read artifacts of "{contract_name}" contract: {e}') from e

    try:
        abi = json.loads(abi_text)
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Invalid ABI JSON in {abi_path}: {e}") from e

    if not isinstance(abi, list):
        raise ArtifactError(f"ABI in {abi_path} is not a JSON array")
    if not all(isinstance(entry, dict) for entry in abi):
        raise ArtifactError(f"ABI in {abi_path} has entries that are not JSON objects")

    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    return Artifact(name=contract_name, bytecode=bytecode, abi=abi)
