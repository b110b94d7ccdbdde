"""Data types and dataclasses for dapp-deploy."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Artifact:
    """A compiled contract: creation bytecode plus its ABI."""

    name: str  # Contract name, e.g. "Token"
    bytecode: str  # 0x-prefixed creation bytecode
    abi: List[Dict[str, Any]]  # Interface descriptor


@dataclass
class DeploymentRequest:
    """Parameters for deploying one artifact."""

    contract_name: str
    constructor_args: List[Any] = field(default_factory=list)
    value: int = 0  # wei
    gas: Optional[int] = None  # None means "estimate"


@dataclass
class PendingContract:
    """Object delivered to a contract-creation callback.

    ``address`` is None while the transaction is pending and set once mined.
    """

    transaction_hash: Optional[str] = None
    address: Optional[str] = None


@dataclass
class DeploymentResult:
    """A contract that was deployed and recorded."""

    contract: str
    address: str

    def to_dict(self) -> Dict[str, str]:
        return {"contract": self.contract, "address": self.address}


@dataclass
class DeploymentFailure:
    """A contract whose deployment or recording failed."""

    contract: str
    error: Exception

    @property
    def detail(self) -> str:
        return str(self.error)


DeploymentOutcome = Union[DeploymentResult, DeploymentFailure]
