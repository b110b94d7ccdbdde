"""Chain session setup for dapp-deploy."""

import asyncio
import logging
from typing import Callable, List, Optional

from .client import ChainClient, Web3ChainClient
from .config import DeployConfig
from .exceptions import (
    AccountIndexOutOfRangeError,
    ChainConnectionError,
    InvalidAccountIndexError,
    NoAccountsError,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], ChainClient]


def pick_account(accounts: List[str], account_index: int) -> str:
    """
    Pick an unlocked account by index.

    Args:
        accounts: Accounts reported by the client
        account_index: Zero-based index into ``accounts``

    Returns:
        Account address

    Raises:
        NoAccountsError: If ``accounts`` is empty
        AccountIndexOutOfRangeError: If the index is past the end
        InvalidAccountIndexError: If the index is negative
    """
    if not accounts:
        raise NoAccountsError("The Ethereum client cannot access any unlocked accounts")

    if account_index >= len(accounts):
        raise AccountIndexOutOfRangeError(
            f"The Ethereum client can only access {len(accounts)} unlocked accounts, "
            f"which are indexed #0..{len(accounts) - 1}. "
            f"The specified index #{account_index} is out-of-bounds."
        )

    if account_index < 0:
        raise InvalidAccountIndexError(f"The specified index #{account_index} is invalid")

    return accounts[account_index]


class ChainSession:
    """A connected client plus the network and owner account of one run.

    Read-only once ``connect`` returns, and shared by all deployments.
    """

    def __init__(self, client: ChainClient):
        self.client = client
        self._network_id: Optional[str] = None
        self._network_lock = asyncio.Lock()
        self._owner: Optional[str] = None

    @classmethod
    async def connect(
        cls,
        config: DeployConfig,
        client_factory: ClientFactory = Web3ChainClient,
    ) -> "ChainSession":
        """
        Connect to the configured endpoint and resolve network and owner.

        Raises:
            ChainConnectionError: If the client is not reachable
            NoAccountsError, AccountIndexOutOfRangeError, InvalidAccountIndexError:
                If no owner account can be selected
        """
        url = config.endpoint_url
        client = client_factory(url)
        session = cls(client)

        try:
            try:
                connected = await client.is_connected()
            except OSError as e:
                raise ChainConnectionError(
                    f"Unable to connect to Ethereum client at {url}: {e}"
                ) from e
            if not connected:
                raise ChainConnectionError(f"Unable to connect to Ethereum client at {url}")

            network_id = await session.network_id()
            owner = await session.resolve_owner(config.account_address, config.account_index)
        except Exception:
            await session.close()
            raise

        logger.info("Connected to %s (network %s), deploying from %s", url, network_id, owner)
        return session

    async def resolve_owner(self, account_address: Optional[str] = None, account_index: int = 0) -> str:
        """Use ``account_address`` verbatim, else the unlocked account at ``account_index``."""
        if account_address:
            self._owner = account_address
        else:
            accounts = await self.client.list_accounts()
            self._owner = pick_account(accounts, account_index)
        return self._owner

    @property
    def owner(self) -> str:
        if self._owner is None:
            raise RuntimeError("Owner account has not been resolved")
        return self._owner

    async def network_id(self) -> str:
        """Network identifier, queried once and cached for the session."""
        async with self._network_lock:
            if self._network_id is None:
                self._network_id = str(await self.client.network_id())
        return self._network_id

    async def close(self) -> None:
        """Close the underlying client."""
        await self.client.close()
