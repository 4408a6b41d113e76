"""``routerforge deploy-router`` / ``deploy-executors``.

Deploy contracts one at a time, verifying each on the simulator and then,
after the settling delay, on the explorer.  Exit code reflects deployment
only: verification failures are reported but never fail the command.
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from routerforge.cli import wiring
from routerforge.config import DeployConfig
from routerforge.core.declarations import record_deployed_executors
from routerforge.core.deployer import DeploymentDriver
from routerforge.core.errors import DeploymentError, FatalConfigError
from routerforge.core.orchestrator import DeploymentOrchestrator
from routerforge.models.contracts import DeployedContract
from routerforge.monitor.renderer import ReportRenderer

console = Console()

NETWORK_OPTION = typer.Option(
    None, "--network", "-n", help="Target network (defaults to $NETWORK)."
)


def _orchestrator(config: DeployConfig, network_id: str) -> DeploymentOrchestrator:
    resolver = wiring.build_resolver(config)
    network = resolver.resolve(network_id)
    artifacts = wiring.build_artifacts(config)
    client = wiring.build_client(config, artifacts)

    signer = client.get_signer()
    ReportRenderer(console).print_signer(signer, "Deploying")

    return DeploymentOrchestrator(
        resolver,
        DeploymentDriver(client),
        wiring.build_verification(config, network, artifacts),
        router_contract=config.router_contract,
    )


def _report_deployment_failure(exc: DeploymentError) -> None:
    console.print(f"[bold red]Deployment failed:[/bold red] {exc}")
    if exc.partial_report is not None and exc.partial_report.deployed:
        console.print(
            "[yellow]Contracts created before the failure "
            "(do not blindly re-run):[/yellow]"
        )
        ReportRenderer(console).print_deployment(exc.partial_report)


def _record_executors(
    config: DeployConfig, network_id: str, deployed: list[DeployedContract]
) -> bool:
    try:
        path = record_deployed_executors(config.executors_file, network_id, deployed)
    except (FatalConfigError, OSError) as exc:
        console.print(f"[bold red]Could not record deployed executors:[/bold red] {exc}")
        return False
    console.print(f"[dim]Recorded {len(deployed)} executor(s) in {path}[/dim]")
    return True


def deploy_router_cmd(network: Optional[str] = NETWORK_OPTION) -> None:
    """Deploy the router with the network's permit2 and wrapped-native addresses."""
    try:
        config = wiring.load_config()
        network_id = wiring.resolve_network_id(config, network)
        report = _orchestrator(config, network_id).deploy_router(network_id)
    except FatalConfigError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except DeploymentError as exc:
        _report_deployment_failure(exc)
        raise typer.Exit(code=1)
    except Exception as exc:
        console.print(f"[bold red]Deployment failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    ReportRenderer(console).print_deployment(report)


def deploy_executors_cmd(
    network: Optional[str] = NETWORK_OPTION,
    only: Optional[list[str]] = typer.Option(
        None, "--only", help="Deploy only the named executor(s). Repeatable."
    ),
    record: bool = typer.Option(
        True,
        "--record/--no-record",
        help="Append deployed executors to the executor declaration file.",
    ),
) -> None:
    """Deploy the network's executors, verifying each one."""
    try:
        config = wiring.load_config()
        network_id = wiring.resolve_network_id(config, network)
        report = _orchestrator(config, network_id).deploy_executors(network_id, only)
    except FatalConfigError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except DeploymentError as exc:
        _report_deployment_failure(exc)
        if record and exc.partial_report is not None and exc.partial_report.deployed:
            _record_executors(config, exc.partial_report.network, exc.partial_report.deployed)
        raise typer.Exit(code=1)
    except Exception as exc:
        console.print(f"[bold red]Deployment failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    ReportRenderer(console).print_deployment(report)
    if record and report.deployed:
        if not _record_executors(config, network_id, report.deployed):
            raise typer.Exit(code=1)
