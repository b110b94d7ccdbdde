"""Network-scoped deployment registry files for dapp-deploy."""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from .config import DeployConfig
from .exceptions import RegistryCorruptError, RegistryReadError, RegistryWriteError
from .log import notice
from .paths import get_registry_path
from .types import DeploymentResult

logger = logging.getLogger(__name__)

Registry = Dict[str, List[str]]


def load_registry(path: Union[Path, str]) -> Registry:
    """
    Load a registry file or return an empty registry.

    Args:
        path: Path to <contract>.deployed file

    Returns:
        Dictionary mapping network id -> list of addresses
        Empty dict if the file doesn't exist

    Raises:
        RegistryReadError: If the file exists but cannot be read
        RegistryCorruptError: If the file is not a JSON object of address lists
    """
    path = Path(path)
    if not path.is_file():
        return {}

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise RegistryReadError(path, str(e)) from e

    try:
        registry = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RegistryCorruptError(path, str(e)) from e

    if not isinstance(registry, dict):
        raise RegistryCorruptError(path, "expected a JSON object keyed by network id")
    for network_id, addresses in registry.items():
        if not isinstance(addresses, list):
            raise RegistryCorruptError(
                path, f"entry for network '{network_id}' is not an array of addresses"
            )

    return registry


def add_address(registry: Registry, network_id: str, address: str) -> Registry:
    """
    Append an address under a network id.

    Other networks are left untouched; existing addresses are never
    deduplicated or reordered.
    """
    registry.setdefault(str(network_id), []).append(address)
    return registry


def save_registry(registry: Registry, path: Union[Path, str], contract_name: str) -> None:
    """
    Write a registry file, replacing any previous content atomically.

    Creates parent directories if they don't exist.

    Raises:
        RegistryWriteError: If the file cannot be written
    """
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as f:
            tmp_name = f.name
            json.dump(registry, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise RegistryWriteError(path, contract_name, str(e)) from e


def record_address(
    contract_name: str,
    address: str,
    network_id: str,
    path: Union[Path, str],
) -> DeploymentResult:
    """
    Add a deployed address to a contract's registry file.

    Raises:
        RegistryReadError, RegistryCorruptError: If the existing file is unusable
            (the file is left unmodified)
        RegistryWriteError: If the updated registry cannot be written
    """
    registry = load_registry(path)
    add_address(registry, network_id, address)
    save_registry(registry, path, contract_name)

    notice(
        logger,
        'Address of deployed "%s" contract has successfully been added to file:\n    %s',
        contract_name,
        path,
    )
    return DeploymentResult(contract=contract_name, address=address)


class RegistryMerger:
    """Records deployed addresses for one run.

    Updates to the same resolved file are serialized, so contracts that share
    an output path do not drop each other's addresses.
    """

    def __init__(self, output_dir: Union[Path, str], output_pattern: Optional[str] = None):
        self.output_dir = Path(output_dir)
        self.output_pattern = output_pattern
        self._locks: Dict[Path, asyncio.Lock] = {}

    @classmethod
    def from_config(cls, config: DeployConfig) -> "RegistryMerger":
        return cls(config.output_dir, config.output_pattern)

    def path_for(self, contract_name: str) -> Path:
        return get_registry_path(contract_name, self.output_dir, self.output_pattern)

    def _lock_for(self, path: Path) -> asyncio.Lock:
        key = path.absolute()
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    async def record_address(
        self, contract_name: str, address: str, network_id: str
    ) -> DeploymentResult:
        path = self.path_for(contract_name)
        async with self._lock_for(path):
            return record_address(contract_name, address, network_id, path)
