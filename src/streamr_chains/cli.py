"""CLI for streamr-chains."""

import logging
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from streamr_chains.exceptions import ChainConfigError
from streamr_chains.operations import parse_operation
from streamr_chains.registry import ChainConfigRegistry, load, load_from_process_environment
from streamr_chains.rpc import resolve_rpc_url, verify_chain_id
from streamr_chains.types import RPCProtocol

app = typer.Typer(
    name="streamr-chains",
    help="Look up contract addresses and RPC endpoints of Streamr networks",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

ENV_OPTION = typer.Option(None, "--env", "-e", help="Environment document to load (default: all chains)")
FROM_NODE_ENV_OPTION = typer.Option(
    False, "--from-node-env", help="Select the environment from $NODE_ENV"
)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(code=1)


def _load_registry(env: Optional[str], from_node_env: bool) -> ChainConfigRegistry:
    if env is not None and from_node_env:
        _fail("--env and --from-node-env are mutually exclusive")
    try:
        if from_node_env:
            return load_from_process_environment()
        return load(env)
    except ChainConfigError as e:
        _fail(str(e))


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
) -> None:
    """Look up contract addresses and RPC endpoints of Streamr networks."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@app.command()
def networks(
    env: Optional[str] = ENV_OPTION,
    from_node_env: bool = FROM_NODE_ENV_OPTION,
) -> None:
    """List configured networks."""
    registry = _load_registry(env, from_node_env)

    table = Table(title="Networks", show_header=True, header_style="bold magenta")
    table.add_column("Network", style="cyan")
    table.add_column("Chain ID", justify="right")
    table.add_column("Environment", style="yellow")
    table.add_column("Contracts", justify="right")
    table.add_column("Default RPC", style="green")

    for network in registry.networks():
        default_rpc = network.rpc_endpoints[0].url if network.rpc_endpoints else "-"
        table.add_row(
            network.name,
            str(network.chain_id),
            network.environment,
            str(len(network.contracts)),
            default_rpc,
        )

    console.print(table)


@app.command()
def address(
    network: str = typer.Argument(..., help="Network name, e.g. polygon"),
    contract: str = typer.Argument(..., help="Contract name, e.g. StreamRegistry"),
    env: Optional[str] = ENV_OPTION,
    from_node_env: bool = FROM_NODE_ENV_OPTION,
) -> None:
    """
    Print the address of a deployed contract.

    Examples:

        streamr-chains address polygon StreamRegistry

        streamr-chains address ethereum DATA-token --env development
    """
    registry = _load_registry(env, from_node_env)
    try:
        typer.echo(str(registry.get(network).contract(contract)))
    except ChainConfigError as e:
        _fail(str(e))


@app.command()
def rpc(
    network: str = typer.Argument(..., help="Network name, e.g. polygon"),
    protocol: RPCProtocol = typer.Option(RPCProtocol.HTTP, "--protocol", "-p", help="Endpoint protocol"),
    env: Optional[str] = ENV_OPTION,
    from_node_env: bool = FROM_NODE_ENV_OPTION,
) -> None:
    """Print the RPC URL of a network, honoring <NETWORK>_RPC_URL overrides."""
    registry = _load_registry(env, from_node_env)
    try:
        typer.echo(resolve_rpc_url(registry.get(network), protocol=protocol))
    except ChainConfigError as e:
        _fail(str(e))


@app.command()
def check(
    network: str = typer.Argument(..., help="Network name, e.g. polygon"),
    rpc_url: Optional[str] = typer.Option(None, "--rpc-url", help="RPC URL to check instead of the configured one"),
    env: Optional[str] = ENV_OPTION,
    from_node_env: bool = FROM_NODE_ENV_OPTION,
) -> None:
    """Verify that the network's RPC endpoint serves the configured chain ID."""
    registry = _load_registry(env, from_node_env)
    try:
        target = registry.get(network)
        chain_id = verify_chain_id(target, rpc_url)
    except (ChainConfigError, RuntimeError, ValueError) as e:
        _fail(str(e))

    console.print(f"[green]✓[/green] {target.name}: chain ID {chain_id}")


@app.command("config-op")
def config_op(
    method: str = typer.Argument(..., help="StreamrConfig getter or setter, e.g. setSlashingFraction"),
    value: Optional[str] = typer.Argument(None, help="Value for a setter, e.g. 0.1"),
    network: Optional[str] = typer.Option(None, "--network", "-n", help="Show the StreamrConfig address on this network"),
    env: Optional[str] = ENV_OPTION,
    from_node_env: bool = FROM_NODE_ENV_OPTION,
) -> None:
    """
    Resolve a StreamrConfig operation and print the encoded call.

    Examples:

        streamr-chains config-op setSlashingFraction 0.1

        streamr-chains config-op minimumStakeWei --network polygon
    """
    try:
        operation = parse_operation(method)
        encoded = operation.encode_value(value)
    except (ChainConfigError, ValueError) as e:
        _fail(str(e))

    table = Table(show_header=False, box=None)
    table.add_column("Label", style="bold")
    table.add_column("Value")
    table.add_row("Method:", operation.method_name)
    table.add_row("Parameter:", operation.parameter.getter)
    table.add_row("Kind:", operation.parameter.kind.value)
    if operation.is_setter:
        table.add_row("Argument:", str(encoded))

    if network is not None:
        registry = _load_registry(env, from_node_env)
        try:
            contract = registry.get(network).contract("StreamrConfig")
        except ChainConfigError as e:
            _fail(str(e))
        table.add_row("Contract:", str(contract))

    console.print(table)


if __name__ == "__main__":
    app()
