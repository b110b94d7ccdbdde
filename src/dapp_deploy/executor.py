"""Single-contract deployment for dapp-deploy."""

import asyncio
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from .client import ChainClient
from .exceptions import DeploymentError
from .session import ChainSession
from .types import (
    Artifact,
    DeploymentFailure,
    DeploymentOutcome,
    DeploymentRequest,
    DeploymentResult,
    PendingContract,
)

logger = logging.getLogger(__name__)


def coerce_constructor_args(abi: List[Dict[str, Any]], args: Sequence[Any]) -> List[Any]:
    """
    Convert string arguments to the Python types the constructor expects.

    Command line parameters always arrive as strings; integer and bool inputs
    are converted, everything else is passed through.
    """
    constructor = next((item for item in abi if item.get("type") == "constructor"), None)
    inputs = constructor.get("inputs", []) if constructor else []

    coerced = list(args)
    for i, (abi_input, arg) in enumerate(zip(inputs, args)):
        if not isinstance(arg, str):
            continue
        abi_type = abi_input.get("type", "")
        if abi_type.endswith("]"):
            continue
        if abi_type.startswith(("uint", "int")):
            try:
                coerced[i] = int(arg, 0)
            except ValueError:
                pass
        elif abi_type == "bool" and arg.lower() in ("true", "false", "1", "0"):
            coerced[i] = arg.lower() in ("true", "1")

    return coerced


async def resolve_gas_budget(
    artifact: Artifact,
    request: DeploymentRequest,
    client: ChainClient,
) -> int:
    """
    Decide how much gas to send with the creation transaction.

    Priority:
    1. Explicit gas from the request (no estimate is made)
    2. Estimate from the raw bytecode when there are no constructor arguments
    3. Estimate from bytecode plus encoded constructor arguments

    Raises:
        DeploymentError: If encoding or estimation fails
    """
    if request.gas is not None:
        return request.gas

    try:
        if not request.constructor_args:
            data = artifact.bytecode
        else:
            data = client.encode_deploy_data(
                artifact.abi, artifact.bytecode, request.constructor_args
            )
        return await client.estimate_gas({"data": data})
    except Exception as e:
        raise DeploymentError(artifact.name, str(e)) from e


async def deploy_contract(
    artifact: Artifact,
    request: DeploymentRequest,
    session: ChainSession,
) -> str:
    """
    Deploy one contract and wait until it is mined.

    Returns:
        Address of the deployed contract

    Raises:
        DeploymentError: If estimation, submission or mining fails
    """
    name = artifact.name
    args = coerce_constructor_args(artifact.abi, request.constructor_args)
    request = replace(request, constructor_args=args)
    gas = await resolve_gas_budget(artifact, request, session.client)

    loop = asyncio.get_running_loop()
    deployed: asyncio.Future = loop.create_future()

    def on_creation(error: Optional[BaseException], contract: Optional[PendingContract]) -> None:
        # First settlement wins; later notifications are ignored
        if deployed.done():
            return
        if error is not None:
            deployed.set_exception(DeploymentError(name, str(error)))
            return
        if contract is None or not contract.address:
            logger.debug(
                'Transaction hash for deployment of "%s" contract:\n    %s',
                name,
                contract.transaction_hash if contract else None,
            )
            return
        logger.info(
            '"%s" contract has successfully been deployed at address:\n    %s',
            name,
            contract.address,
        )
        deployed.set_result(contract.address)

    tx_params = {
        "from": session.owner,
        "gas": gas,
        "value": request.value,
    }

    try:
        await session.client.create_contract(
            artifact.abi, artifact.bytecode, args, tx_params, on_creation
        )
    except Exception as e:
        raise DeploymentError(name, str(e)) from e

    return await deployed


async def deploy_artifact(
    artifact: Artifact,
    request: DeploymentRequest,
    session: ChainSession,
) -> DeploymentOutcome:
    """Deploy one contract, reporting failure as a DeploymentFailure instead of raising."""
    try:
        address = await deploy_contract(artifact, request, session)
    except DeploymentError as e:
        return DeploymentFailure(contract=artifact.name, error=e)
    return DeploymentResult(contract=artifact.name, address=address)
