"""Run configuration for dapp-deploy."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from .constants import (
    CONTRACT_PLACEHOLDER,
    DEFAULT_HOST,
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PORT,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class DeployConfig:
    """Options for one deployment run.

    Built once (by the CLI or a library caller) and handed to every component
    of the run. Constructor arguments and value are shared by every artifact
    selected for the run.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    tls: bool = False

    account_address: Optional[str] = None
    account_index: int = 0

    input_dir: Union[Path, str] = DEFAULT_INPUT_DIR
    output_dir: Union[Path, str] = DEFAULT_OUTPUT_DIR
    output_pattern: Optional[str] = None
    contracts: Tuple[str, ...] = ()

    constructor_args: Tuple[Any, ...] = ()
    value: int = 0
    gas: Optional[int] = None

    quiet: bool = False
    verbosity: int = 0

    def __post_init__(self):
        # Normalize sequences so the config stays hashable and immutable
        object.__setattr__(self, "contracts", tuple(self.contracts))
        object.__setattr__(self, "constructor_args", tuple(self.constructor_args))
        object.__setattr__(self, "input_dir", Path(self.input_dir))
        object.__setattr__(self, "output_dir", Path(self.output_dir))

        if self.output_pattern is not None and CONTRACT_PLACEHOLDER not in self.output_pattern:
            raise ConfigurationError(
                f"Output pattern '{self.output_pattern}' must contain the "
                f"substitution pattern '{CONTRACT_PLACEHOLDER}'"
            )
        if self.value < 0:
            raise ConfigurationError(f"Value must not be negative, got {self.value}")
        if self.gas is not None and self.gas <= 0:
            raise ConfigurationError(f"Gas must be a positive integer, got {self.gas}")

    @property
    def endpoint_url(self) -> str:
        """JSON-RPC endpoint, e.g. ``http://localhost:8545``."""
        scheme = "https" if self.tls else "http"
        return f"{scheme}://{self.host}:{self.port}"
