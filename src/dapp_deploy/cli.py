"""CLI entrypoint for dapp-deploy."""

import asyncio
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console

from . import __version__
from .client import Web3ChainClient
from .config import DeployConfig
from .constants import (
    ACCOUNT_ENV,
    DEFAULT_HOST,
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PORT,
    HOST_ENV,
    PORT_ENV,
)
from .coordinator import execute_run, format_payload, render_summary
from .exceptions import ArtifactError, ConfigurationError, SessionError
from .log import configure_logging

EPILOG = """\b
Each deployed contract address is saved to a JSON data file.
Format is a hash table:
    Ethereum network ID => array of addresses

\b
Examples:
  dapp-deploy
      deploy all contracts via "http://localhost:8545" using account index #0
  dapp-deploy -A 1
      deploy all contracts using account index #1
  dapp-deploy -h mainnet.infura.io -p 443 --ssl -a 0xB9903E9360E4534C737b33F8a6Fef667D5405A40
      deploy all contracts via "https://mainnet.infura.io:443" using that account
  dapp-deploy -c Foo --params bar --params baz --params 123 --value 100
      deploy "Foo", call "Foo('bar', 'baz', 123)" and pay 100 wei to it
  dapp-deploy -c Foo -c Bar -c Baz
      deploy contracts "Foo", "Bar" and "Baz"
  dapp-deploy -c Foo -o ~/Dapp_frontend/contracts
      generate "~/Dapp_frontend/contracts/Foo.deployed"
  dapp-deploy -c Foo -O "~/Dapp_frontend/contracts/{{contract}}.deployed.json"
      generate "~/Dapp_frontend/contracts/Foo.deployed.json"
"""


@click.command(epilog=EPILOG)
@click.version_option(__version__, prog_name="dapp-deploy")
@click.option("--all", "deploy_all", is_flag=True, default=True, help="Deploy all contracts (default)")
@click.option(
    "-c",
    "--contract",
    "contracts",
    multiple=True,
    help="Deploy only the specified contract (repeatable)",
)
@click.option(
    "--params",
    multiple=True,
    help="Parameter to pass to contract constructors (repeatable, in order). "
    "Contracts whose constructors take parameters should usually be deployed individually.",
)
@click.option(
    "--value",
    "--wei",
    "value",
    type=int,
    default=0,
    show_default=True,
    help="Value (wei) to pass to contract constructors",
)
@click.option(
    "--gas",
    type=int,
    default=None,
    help="Gas to send with each transaction (by default the amount is estimated)",
)
@click.option(
    "-h",
    "--host",
    envvar=HOST_ENV,
    default=DEFAULT_HOST,
    show_default=True,
    help="Ethereum JSON-RPC server hostname",
)
@click.option(
    "-p",
    "--port",
    envvar=PORT_ENV,
    type=int,
    default=DEFAULT_PORT,
    show_default=True,
    help="Ethereum JSON-RPC server port number",
)
@click.option(
    "--tls",
    "--https",
    "--ssl",
    "tls",
    is_flag=True,
    help="Connect to the JSON-RPC server over https",
)
@click.option(
    "-a",
    "--aa",
    "--account_address",
    "account_address",
    envvar=ACCOUNT_ENV,
    default=None,
    help="Address of Ethereum account to own deployed contracts",
)
@click.option(
    "-A",
    "--ai",
    "--account_index",
    "account_index",
    type=int,
    default=0,
    show_default=True,
    help="Index of the unlocked Ethereum account to own deployed contracts",
)
@click.option(
    "-i",
    "--input_directory",
    "input_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_INPUT_DIR,
    show_default=True,
    help="Directory holding compiled .bin and .abi artifacts",
)
@click.option(
    "-o",
    "--od",
    "--output_directory",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
    help='Directory for "<contract>.deployed" JSON files',
)
@click.option(
    "-O",
    "--op",
    "--output_pattern",
    "output_pattern",
    default=None,
    help='Output file path pattern; "{{contract}}" is replaced by the contract name',
)
@click.option("-v", "--verbose", "verbosity", count=True, help="Log more detail (repeatable)")
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Only print the deployed address(es): a string for a single contract, "
    "otherwise a JSON array of {contract, address}",
)
def main(
    deploy_all: bool,
    contracts: Tuple[str, ...],
    params: Tuple[str, ...],
    value: int,
    gas: Optional[int],
    host: str,
    port: int,
    tls: bool,
    account_address: Optional[str],
    account_index: int,
    input_dir: Path,
    output_dir: Path,
    output_pattern: Optional[str],
    verbosity: int,
    quiet: bool,
) -> None:
    """Deploy contracts compiled by "dapp build" to an Ethereum blockchain.

    Reads CONTRACT.bin and CONTRACT.abi from the input directory and records
    every new address in CONTRACT.deployed, keyed by Ethereum network ID.
    """
    try:
        config = DeployConfig(
            host=host,
            port=port,
            tls=tls,
            account_address=account_address,
            account_index=account_index,
            input_dir=input_dir,
            output_dir=output_dir,
            output_pattern=output_pattern,
            contracts=contracts,
            constructor_args=params,
            value=value,
            gas=gas,
            quiet=quiet,
            verbosity=verbosity,
        )
    except ConfigurationError as e:
        raise click.BadParameter(str(e)) from e

    configure_logging(config.verbosity, config.quiet)

    try:
        outcomes = asyncio.run(execute_run(config, client_factory=Web3ChainClient))
    except (ArtifactError, SessionError) as e:
        raise click.ClickException(str(e)) from e

    if config.quiet:
        payload = format_payload(outcomes)
        if payload is not None:
            click.echo(payload, nl=False)
    else:
        render_summary(outcomes, Console(stderr=True))
