"""Ethereum JSON-RPC client adapter for dapp-deploy."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence

from web3 import AsyncWeb3, Web3
from web3.exceptions import TransactionNotFound

from .constants import RECEIPT_POLL_INTERVAL
from .types import PendingContract

logger = logging.getLogger(__name__)

# callback(error, pending_contract); fired once when the creation transaction
# is sent and again when it is mined, or once with an error
CreationCallback = Callable[[Optional[BaseException], Optional[PendingContract]], None]


class ChainClient(ABC):
    """Operations dapp-deploy needs from an Ethereum client."""

    @abstractmethod
    async def is_connected(self) -> bool:
        ...

    @abstractmethod
    async def list_accounts(self) -> List[str]:
        ...

    @abstractmethod
    async def network_id(self) -> str:
        ...

    @abstractmethod
    async def estimate_gas(self, transaction: Dict[str, Any]) -> int:
        ...

    @abstractmethod
    def encode_deploy_data(
        self, abi: List[Dict[str, Any]], bytecode: str, args: Sequence[Any]
    ) -> str:
        """Return creation bytecode followed by the ABI-encoded constructor arguments."""

    @abstractmethod
    async def create_contract(
        self,
        abi: List[Dict[str, Any]],
        bytecode: str,
        args: Sequence[Any],
        tx_params: Dict[str, Any],
        callback: CreationCallback,
    ) -> None:
        """
        Submit a contract-creation transaction.

        The creation data is built from ``bytecode`` and ``args``; ``tx_params``
        carries only the sender, gas and value and never a "data" field.
        Returns once the transaction has been handed off; progress is reported
        through ``callback``.
        """

    async def close(self) -> None:
        """Release transport resources held by the client."""


class Web3ChainClient(ChainClient):
    """ChainClient backed by an asynchronous web3.py HTTP provider."""

    def __init__(
        self,
        endpoint_url: str,
        poll_interval: float = RECEIPT_POLL_INTERVAL,
        w3: Optional[AsyncWeb3] = None,
    ):
        self.endpoint_url = endpoint_url
        self._poll_interval = poll_interval
        self._w3 = w3 if w3 is not None else AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(endpoint_url))
        # Keep references so pending creations are not garbage collected
        self._creations: set = set()

    async def is_connected(self) -> bool:
        return await self._w3.is_connected()

    async def list_accounts(self) -> List[str]:
        return list(await self._w3.eth.accounts)

    async def network_id(self) -> str:
        return str(await self._w3.net.version)

    async def estimate_gas(self, transaction: Dict[str, Any]) -> int:
        return await self._w3.eth.estimate_gas(transaction)

    async def close(self) -> None:
        await self._w3.provider.disconnect()

    def encode_deploy_data(
        self, abi: List[Dict[str, Any]], bytecode: str, args: Sequence[Any]
    ) -> str:
        contract = self._w3.eth.contract(abi=abi, bytecode=bytecode)
        return contract.constructor(*args).data_in_transaction

    async def create_contract(
        self,
        abi: List[Dict[str, Any]],
        bytecode: str,
        args: Sequence[Any],
        tx_params: Dict[str, Any],
        callback: CreationCallback,
    ) -> None:
        task = asyncio.ensure_future(self._create(abi, bytecode, args, tx_params, callback))
        self._creations.add(task)
        task.add_done_callback(self._creations.discard)

    async def _create(
        self,
        abi: List[Dict[str, Any]],
        bytecode: str,
        args: Sequence[Any],
        tx_params: Dict[str, Any],
        callback: CreationCallback,
    ) -> None:
        # Bytecode is bound to the contract factory; web3 rejects an explicit "data" field
        params = {k: v for k, v in tx_params.items() if k != "data"}

        try:
            contract = self._w3.eth.contract(abi=abi, bytecode=bytecode)
            tx_hash = Web3.to_hex(await contract.constructor(*args).transact(params))
            callback(None, PendingContract(transaction_hash=tx_hash))

            receipt = await self._wait_for_receipt(tx_hash)
            if receipt.get("status") == 0:
                raise RuntimeError(f"Contract creation transaction {tx_hash} was reverted")
            address = receipt["contractAddress"]
        except Exception as e:
            callback(e, None)
            return

        callback(None, PendingContract(transaction_hash=tx_hash, address=address))

    async def _wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        # No upper bound: liveness is left to the node
        while True:
            try:
                return await self._w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                logger.debug("Waiting for receipt of %s", tx_hash)
                await asyncio.sleep(self._poll_interval)
