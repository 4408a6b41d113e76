"""Main Typer application: imports and registers all CLI commands.

Entry point: ``routerforge`` (configured via pyproject.toml console_scripts).

Commands: deploy-router, deploy-executors, set-executors, set-roles,
fund-wallet, networks.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from routerforge.cli import wiring
from routerforge.cli.commands.deploy import deploy_executors_cmd, deploy_router_cmd
from routerforge.cli.commands.fund_wallet import fund_wallet_cmd
from routerforge.cli.commands.set_executors import set_executors_cmd
from routerforge.cli.commands.set_roles import set_roles_cmd
from routerforge.core.errors import FatalConfigError

app = typer.Typer(
    name="routerforge",
    help="Deploy, verify and permission the router and its executors.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _configure(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to $LOG_LEVEL or INFO)."
    ),
) -> None:
    try:
        level = log_level or wiring.load_config().log_level
    except FatalConfigError:
        # the command reports the invalid setting itself
        level = "INFO"
    wiring.configure_logging(level)


# Register subcommands
app.command(name="deploy-router", help="Deploy and verify the router.")(deploy_router_cmd)
app.command(name="deploy-executors", help="Deploy and verify executors.")(deploy_executors_cmd)
app.command(name="set-executors", help="Register missing executors on the router.")(
    set_executors_cmd
)
app.command(name="set-roles", help="Grant declared roles on the router.")(set_roles_cmd)
app.command(name="fund-wallet", help="Top up the deploy wallet on a simulation fork.")(
    fund_wallet_cmd
)


@app.command(name="networks", help="List supported networks.")
def networks_cmd() -> None:
    """List supported networks and their deployment parameters."""
    console = Console()
    try:
        resolver = wiring.build_resolver(wiring.load_config())
    except FatalConfigError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title="Supported Networks")
    table.add_column("Network", style="cyan")
    table.add_column("Chain ID", justify="right")
    table.add_column("WETH")
    table.add_column("Executors", justify="right")
    table.add_column("Simulation", justify="center")
    for network_id in resolver.supported_networks:
        network = resolver.resolve(network_id)
        table.add_row(
            network.network_id,
            str(network.chain_id),
            network.weth,
            str(len(network.executors)),
            "[yellow]Yes[/yellow]" if network.is_simulation else "No",
        )
    console.print(table)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
