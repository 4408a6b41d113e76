"""``routerforge set-executors``: reconcile the router's executor registry.

Registers every declared executor that is not yet set, in one batched
transaction gated by operator confirmation.  Declining is a clean exit.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from routerforge.cli import wiring
from routerforge.cli.commands.deploy import NETWORK_OPTION
from routerforge.core.confirmation import (
    AutoApprove,
    ConfirmationProvider,
    PolicyFileConfirmation,
    PromptConfirmation,
)
from routerforge.core.errors import FatalConfigError, UserAborted
from routerforge.core.executor_registry import ExecutorRegistrySetter
from routerforge.monitor.renderer import ReportRenderer

console = Console()


def set_executors_cmd(
    network: Optional[str] = NETWORK_OPTION,
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Approve the batch without prompting."
    ),
    policy: Optional[Path] = typer.Option(
        None,
        "--policy",
        help="JSON file of approved executor addresses per network.",
    ),
) -> None:
    """Set every declared executor that the router does not yet have."""
    confirmation: ConfirmationProvider
    try:
        config = wiring.load_config()
        if yes:
            confirmation = AutoApprove()
        elif policy is not None:
            confirmation = PolicyFileConfirmation(policy)
        else:
            confirmation = PromptConfirmation(console)

        network_id = wiring.resolve_network_id(config, network)
        wiring.build_resolver(config).resolve(network_id)
        config.require("router_address")
        client = wiring.build_client(config, wiring.build_artifacts(config))
        ReportRenderer(console).print_signer(client.get_signer(), "Setting executors")

        setter = ExecutorRegistrySetter(
            client,
            confirmation,
            executors_file=config.executors_file,
            router_address=config.router_address,
            gas_per_executor=config.gas_per_executor,
            query_concurrency=config.query_concurrency,
            router_contract=config.router_contract,
        )
        result = setter.reconcile(network_id)
    except UserAborted:
        console.print("[yellow]Operation cancelled by user.[/yellow]")
        raise typer.Exit(code=0)
    except FatalConfigError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except Exception as exc:
        console.print(f"[bold red]Error setting executors:[/bold red] {exc}")
        raise typer.Exit(code=1)

    ReportRenderer(console).print_reconcile(result)
