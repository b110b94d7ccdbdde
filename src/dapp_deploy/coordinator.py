"""Run coordination and result rendering for dapp-deploy."""

import asyncio
import json
import logging
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .artifacts import discover_artifacts, load_artifact
from .client import Web3ChainClient
from .config import DeployConfig
from .exceptions import ArtifactError, DeploymentError, RegistryError
from .executor import deploy_artifact
from .registry import RegistryMerger
from .session import ChainSession, ClientFactory
from .types import (
    DeploymentFailure,
    DeploymentOutcome,
    DeploymentRequest,
    DeploymentResult,
)

logger = logging.getLogger(__name__)


def build_request(config: DeployConfig, contract_name: str) -> DeploymentRequest:
    """Per-contract request; constructor arguments are copied, not shared."""
    return DeploymentRequest(
        contract_name=contract_name,
        constructor_args=list(config.constructor_args),
        value=config.value,
        gas=config.gas,
    )


async def _process_contract(
    config: DeployConfig,
    contract_name: str,
    session: ChainSession,
    merger: RegistryMerger,
    network_id: str,
) -> DeploymentOutcome:
    try:
        artifact = load_artifact(config.input_dir, contract_name)
    except ArtifactError as e:
        logger.error("%s", e)
        return DeploymentFailure(contract=contract_name, error=e)

    outcome = await deploy_artifact(artifact, build_request(config, contract_name), session)
    if isinstance(outcome, DeploymentFailure):
        logger.error("%s", outcome.detail)
        return outcome

    try:
        return await merger.record_address(contract_name, outcome.address, network_id)
    except RegistryError as e:
        logger.error("%s", e)
        return DeploymentFailure(contract=contract_name, error=e)


async def _deploy_and_record(
    config: DeployConfig,
    contract_name: str,
    session: ChainSession,
    merger: RegistryMerger,
    network_id: str,
) -> DeploymentOutcome:
    try:
        return await _process_contract(config, contract_name, session, merger, network_id)
    except Exception as e:
        # Anything unexpected still fails this contract only
        error = DeploymentError(contract_name, f"{type(e).__name__}: {e}")
        logger.error("%s", error)
        return DeploymentFailure(contract=contract_name, error=error)


async def run_deployments(
    config: DeployConfig,
    session: ChainSession,
    contract_names: Sequence[str],
    merger: Optional[RegistryMerger] = None,
) -> List[DeploymentOutcome]:
    """
    Deploy and record every named contract concurrently.

    A failing contract does not stop the others. Outcomes are returned in the
    order of ``contract_names``.
    """
    if merger is None:
        merger = RegistryMerger.from_config(config)

    network_id = await session.network_id()

    return list(
        await asyncio.gather(
            *(
                _deploy_and_record(config, name, session, merger, network_id)
                for name in contract_names
            )
        )
    )


async def execute_run(
    config: DeployConfig,
    client_factory: ClientFactory = Web3ChainClient,
) -> List[DeploymentOutcome]:
    """
    Discover artifacts, open the session and deploy everything selected.

    Raises:
        ArtifactError: If the input directory cannot be listed
        SessionError: If the client is unreachable or no owner can be resolved;
            nothing has been deployed in that case
    """
    contract_names = discover_artifacts(config)
    session = await ChainSession.connect(config, client_factory)
    try:
        return await run_deployments(config, session, contract_names)
    finally:
        await session.close()


def format_payload(outcomes: Sequence[DeploymentOutcome]) -> Optional[str]:
    """
    Machine-readable result for quiet mode.

    Returns:
        The bare address when a single contract was processed and deployed,
        None when a single contract was processed and failed, otherwise a JSON
        array of {"contract", "address"} objects for the successful ones
    """
    results = [o for o in outcomes if isinstance(o, DeploymentResult)]

    if len(outcomes) == 1:
        return results[0].address if results else None

    return json.dumps([r.to_dict() for r in results])


def render_summary(outcomes: Sequence[DeploymentOutcome], console: Console) -> None:
    """Print a table of deployed addresses and failures."""
    if not outcomes:
        console.print("No contracts to deploy", style="yellow")
        return

    table = Table(title="Deployments")
    table.add_column("contract", style="cyan", no_wrap=True)
    table.add_column("result")

    for outcome in outcomes:
        if isinstance(outcome, DeploymentResult):
            table.add_row(outcome.contract, outcome.address)
        else:
            table.add_row(outcome.contract, Text(outcome.detail, style="red"))

    console.print(table)
