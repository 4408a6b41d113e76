"""``routerforge fund-wallet``: top up the deploy wallet on a simulation fork."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from routerforge.chain.funding import fund_wallet
from routerforge.cli import wiring
from routerforge.cli.commands.deploy import NETWORK_OPTION
from routerforge.core.errors import FatalConfigError

console = Console()


def fund_wallet_cmd(
    network: Optional[str] = NETWORK_OPTION,
    amount: float = typer.Option(10.0, "--amount", help="Balance to set, in ether."),
) -> None:
    """Set $DEPLOY_WALLET's balance on a Tenderly fork."""
    try:
        config = wiring.load_config()
        network_id = wiring.resolve_network_id(config, network)
        network_config = wiring.build_resolver(config).resolve(network_id)
        config.require("rpc_url", "deploy_wallet")
        client = wiring.build_rpc_client(config)
        fund_wallet(client, network_config, config.deploy_wallet, amount)
    except FatalConfigError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except Exception as exc:
        console.print(f"[bold red]Error funding wallet:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]Successfully funded wallet:[/bold green] {config.deploy_wallet}"
    )
