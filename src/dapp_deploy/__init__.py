"""
dapp-deploy: deploy "dapp build" artifacts and record their addresses per network
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import discover_artifacts, load_artifact, select_artifacts
from .client import ChainClient, Web3ChainClient
from .config import DeployConfig
from .coordinator import execute_run, run_deployments
from .exceptions import (
    AccountIndexOutOfRangeError,
    ArtifactError,
    ChainConnectionError,
    ConfigurationError,
    DappDeployError,
    DeploymentError,
    InvalidAccountIndexError,
    NoAccountsError,
    RegistryCorruptError,
    RegistryError,
    RegistryReadError,
    RegistryWriteError,
    SessionError,
)
from .executor import deploy_artifact
from .registry import RegistryMerger, record_address
from .session import ChainSession
from .types import (
    Artifact,
    DeploymentFailure,
    DeploymentRequest,
    DeploymentResult,
    PendingContract,
)

try:
    __version__ = version("dapp-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeployConfig",
    "ChainSession",
    "ChainClient",
    "Web3ChainClient",
    "select_artifacts",
    "discover_artifacts",
    "load_artifact",
    "deploy_artifact",
    "record_address",
    "RegistryMerger",
    "run_deployments",
    "execute_run",
    "Artifact",
    "DeploymentRequest",
    "DeploymentResult",
    "DeploymentFailure",
    "PendingContract",
    "DappDeployError",
    "ConfigurationError",
    "SessionError",
    "ChainConnectionError",
    "NoAccountsError",
    "AccountIndexOutOfRangeError",
    "InvalidAccountIndexError",
    "ArtifactError",
    "DeploymentError",
    "RegistryError",
    "RegistryCorruptError",
    "RegistryReadError",
    "RegistryWriteError",
]
