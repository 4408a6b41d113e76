"""``routerforge set-roles``: grant declared router roles.

One batched grant per role with declared addresses.  A failed grant is
reported and the remaining roles are still attempted.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from routerforge.cli import wiring
from routerforge.cli.commands.deploy import NETWORK_OPTION
from routerforge.core.errors import FatalConfigError
from routerforge.core.role_provisioner import RoleGrantProvisioner
from routerforge.monitor.renderer import ReportRenderer

console = Console()


def set_roles_cmd(network: Optional[str] = NETWORK_OPTION) -> None:
    """Grant every declared role on the router, one transaction per role."""
    try:
        config = wiring.load_config()
        network_id = wiring.resolve_network_id(config, network)
        wiring.build_resolver(config).resolve(network_id)
        config.require("router_address")
        client = wiring.build_client(config, wiring.build_artifacts(config))
        ReportRenderer(console).print_signer(client.get_signer(), "Setting roles")

        provisioner = RoleGrantProvisioner(
            client,
            roles_file=config.roles_file,
            router_address=config.router_address,
            router_contract=config.router_contract,
        )
        report = provisioner.provision(network_id)
    except FatalConfigError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except Exception as exc:
        console.print(f"[bold red]Error setting roles:[/bold red] {exc}")
        raise typer.Exit(code=1)

    ReportRenderer(console).print_roles(report)
    if report.failed:
        console.print(
            f"[yellow]{len(report.failed)} role grant(s) failed; "
            "re-running is safe once the cause is fixed.[/yellow]"
        )
