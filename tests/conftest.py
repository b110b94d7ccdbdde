"""Shared pytest fixtures for dapp-deploy tests."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

from dapp_deploy.client import ChainClient, CreationCallback
from dapp_deploy.types import PendingContract

TOKEN_ABI: List[Dict[str, Any]] = [
    {
        "type": "constructor",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "supply", "type": "uint256"},
        ],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "totalSupply",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
]

PLAIN_ABI: List[Dict[str, Any]] = [
    {
        "type": "function",
        "name": "ping",
        "inputs": [],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
]


class FakeChainClient(ChainClient):
    """In-memory ChainClient recording every call it receives.

    Each contract creation fires the callback with a transaction hash and then
    with an address, unless ``creation_events`` scripts something else.
    """

    def __init__(
        self,
        endpoint_url: str = "http://localhost:8545",
        *,
        connected: bool = True,
        accounts: Optional[List[str]] = None,
        network: str = "4",
        gas_estimate: int = 150000,
        estimate_error: Optional[Exception] = None,
        create_error: Optional[Exception] = None,
        creation_events: Optional[List[tuple]] = None,
    ):
        self.endpoint_url = endpoint_url
        self.connected = connected
        self.accounts = ["0xOwner0", "0xOwner1"] if accounts is None else accounts
        self.network = network
        self.gas_estimate = gas_estimate
        self.estimate_error = estimate_error
        self.create_error = create_error
        self.creation_events = creation_events

        self.list_accounts_calls = 0
        self.network_id_calls = 0
        self.estimate_calls: List[Dict[str, Any]] = []
        self.encode_calls: List[tuple] = []
        self.creations: List[Dict[str, Any]] = []
        self.close_calls = 0
        self._tasks: set = set()

    async def is_connected(self) -> bool:
        return self.connected

    async def list_accounts(self) -> List[str]:
        self.list_accounts_calls += 1
        return list(self.accounts)

    async def network_id(self) -> str:
        self.network_id_calls += 1
        return self.network

    async def estimate_gas(self, transaction: Dict[str, Any]) -> int:
        self.estimate_calls.append(transaction)
        if self.estimate_error is not None:
            raise self.estimate_error
        return self.gas_estimate

    def encode_deploy_data(self, abi, bytecode: str, args: Sequence[Any]) -> str:
        self.encode_calls.append((bytecode, list(args)))
        return bytecode + "".join("%064x" % (i + 1) for i, _ in enumerate(args))

    async def create_contract(self, abi, bytecode, args, tx_params, callback: CreationCallback) -> None:
        if self.create_error is not None:
            raise self.create_error

        index = len(self.creations)
        self.creations.append(
            {"abi": abi, "bytecode": bytecode, "args": list(args), "tx_params": dict(tx_params)}
        )

        if self.creation_events is not None:
            events = self.creation_events
        else:
            tx_hash = "0x%064x" % (index + 1)
            events = [
                (None, PendingContract(transaction_hash=tx_hash)),
                (None, PendingContract(transaction_hash=tx_hash, address=self.address_for(index))),
            ]

        task = asyncio.ensure_future(self._fire(events, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def close(self) -> None:
        self.close_calls += 1

    @staticmethod
    def address_for(index: int) -> str:
        return "0x%040x" % (0xC0FFEE + index)

    async def _fire(self, events, callback: CreationCallback) -> None:
        for error, contract in events:
            await asyncio.sleep(0)
            callback(error, contract)


def write_artifact(directory: Path, name: str, bytecode: str = "6080604052", abi=None) -> None:
    """Write <name>.bin and <name>.abi into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"{name}.bin").write_text(bytecode + "\n")
    (directory / f"{name}.abi").write_text(json.dumps(PLAIN_ABI if abi is None else abi))


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo any handler installed by configure_logging."""
    yield
    logger = logging.getLogger("dapp_deploy")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def fake_client() -> FakeChainClient:
    """Return a connected fake client with two unlocked accounts on network 4."""
    return FakeChainClient()


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Create an input directory with Foo and Bar artifacts plus unmatched files."""
    out = tmp_path / "out"
    write_artifact(out, "Foo", bytecode="60806040aa")
    write_artifact(out, "Bar", bytecode="60806040bb")
    # Bytecode without ABI and ABI without bytecode are ignored
    (out / "Lonely.bin").write_text("60806040cc")
    (out / "Orphan.abi").write_text("[]")
    (out / "README.md").write_text("not an artifact")
    return out


@pytest.fixture
def token_artifact_dir(tmp_path: Path) -> Path:
    """Create an input directory with a Token contract whose constructor takes arguments."""
    out = tmp_path / "out"
    write_artifact(out, "Token", bytecode="60806040dd", abi=TOKEN_ABI)
    return out


@pytest.fixture
def make_client():
    """Return the FakeChainClient class, for tests that need custom behaviour."""
    return FakeChainClient


@pytest.fixture
def artifact_writer():
    """Return the write_artifact helper."""
    return write_artifact
