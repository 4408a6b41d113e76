"""Rich terminal rendering for run reports.

Color scheme
------------
- green     : verified / granted / submitted
- yellow    : partially verified / skipped
- red       : failed / unverified
"""

from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from routerforge.models.chain import SignerInfo
from routerforge.models.registry import ReconcileResult
from routerforge.models.reports import DeploymentRunReport
from routerforge.models.roles import RoleGrantStatus, RoleProvisionReport
from routerforge.models.verification import (
    VerificationOutcome,
    VerificationResult,
    VerificationStatus,
)

_STATUS_ICONS: dict[VerificationStatus, str] = {
    VerificationStatus.VERIFIED: "[green]VERIFIED[/green]",
    VerificationStatus.FAILED: "[bold red]FAILED[/bold red]",
    VerificationStatus.SKIPPED: "[dim]SKIPPED[/dim]",
}

_OUTCOME_ICONS: dict[VerificationOutcome, str] = {
    VerificationOutcome.BOTH_VERIFIED: "[green]both verified[/green]",
    VerificationOutcome.PARTIALLY_VERIFIED: "[yellow]partially verified[/yellow]",
    VerificationOutcome.UNVERIFIED: "[red]unverified[/red]",
}

_GRANT_ICONS: dict[RoleGrantStatus, str] = {
    RoleGrantStatus.GRANTED: "[green]GRANTED[/green]",
    RoleGrantStatus.SKIPPED: "[dim]SKIPPED[/dim]",
    RoleGrantStatus.FAILED: "[bold red]FAILED[/bold red]",
}


def _status_cell(result: VerificationResult | None) -> str:
    if result is None:
        return "[dim]-[/dim]"
    return _STATUS_ICONS[result.status]


class ReportRenderer:
    """Renders routerforge reports as Rich terminal output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Deployment
    # ------------------------------------------------------------------

    def render_deployment(self, report: DeploymentRunReport) -> Panel:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Contract", style="cyan")
        table.add_column("Address")
        table.add_column("Simulator", justify="center")
        table.add_column("Explorer", justify="center")
        table.add_column("Outcome")

        records = {r.deployed.address: r for r in report.verification.records}
        for contract in report.deployed:
            record = records.get(contract.address)
            table.add_row(
                contract.logical_name,
                contract.address,
                _status_cell(record.simulator if record else None),
                _status_cell(record.explorer if record else None),
                _OUTCOME_ICONS[record.outcome] if record else "[dim]-[/dim]",
            )

        summary = "  |  ".join([
            f"[bold]Run:[/bold] {report.run_id}",
            f"[bold]Network:[/bold] {report.network}",
            f"[bold]Deployed:[/bold] {len(report.deployed)}",
            f"[bold]Fully verified:[/bold] "
            f"{report.verification.count(VerificationOutcome.BOTH_VERIFIED)}",
        ])
        return Panel(
            Group(table, Text(""), Text.from_markup(summary)),
            title="[bold]Deployment[/bold]",
            border_style="cyan",
        )

    def print_deployment(self, report: DeploymentRunReport) -> None:
        self.console.print(self.render_deployment(report))

    # ------------------------------------------------------------------
    # Registry and roles
    # ------------------------------------------------------------------

    def print_reconcile(self, result: ReconcileResult) -> None:
        if result.is_noop:
            self.console.print(
                "[bold green]All executors are already set. No changes needed.[/bold green]"
            )
            return
        receipt = result.receipt
        self.console.print(
            f"[bold green]{len(result.proposal.to_set)} executor(s) set[/bold green] "
            f"at transaction: {receipt.tx_hash if receipt else '-'}"
        )

    def render_roles(self, report: RoleProvisionReport) -> Table:
        table = Table(title=f"Roles on {report.network}")
        table.add_column("Role", style="cyan")
        table.add_column("Status", justify="center")
        table.add_column("Addresses")
        table.add_column("Transaction / reason")
        for result in report.results:
            detail = result.receipt.tx_hash if result.receipt else result.reason
            table.add_row(
                result.role.value,
                _GRANT_ICONS[result.status],
                "\n".join(result.addresses) or "[dim]none[/dim]",
                detail,
            )
        return table

    def print_roles(self, report: RoleProvisionReport) -> None:
        self.console.print(self.render_roles(report))

    # ------------------------------------------------------------------
    # Signer
    # ------------------------------------------------------------------

    def print_signer(self, signer: SignerInfo, action: str) -> None:
        self.console.print(f"{action} with account: [bold]{signer.address}[/bold]")
        self.console.print(f"Account balance: {signer.balance_ether:.6f} ETH")
