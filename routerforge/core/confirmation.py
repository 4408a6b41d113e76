"""Pluggable operator confirmation for privileged batched transactions.

Any object with ``confirm(proposal) -> bool`` satisfies
``ConfirmationProvider``.  Only an explicit affirmative approves.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.table import Table

from routerforge.core.errors import DeclarationError
from routerforge.models.registry import ReconcileProposal

logger = logging.getLogger(__name__)

PROMPT = "Do you want to proceed with setting these executors? (yes/no): "


@runtime_checkable
class ConfirmationProvider(Protocol):
    """Approves or rejects a reconciliation proposal."""

    def confirm(self, proposal: ReconcileProposal) -> bool: ...


def is_affirmative(answer: str | None) -> bool:
    """Only ``yes`` (any case, surrounding whitespace ignored) approves."""
    return (answer or "").strip().lower() == "yes"


def render_proposal(proposal: ReconcileProposal) -> Table:
    table = Table(
        title=f"{len(proposal.to_set)} executor(s) will be set on {proposal.network}"
    )
    table.add_column("Name", style="cyan")
    table.add_column("Address", style="green")
    for entry in proposal.to_set:
        table.add_row(entry.name, entry.address)
    table.caption = f"router {proposal.router_address}, gas limit {proposal.gas_limit:,}"
    return table


class PromptConfirmation:
    """Interactive yes/no prompt on the operator's terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def confirm(self, proposal: ReconcileProposal) -> bool:
        self.console.print(render_proposal(proposal))
        try:
            answer = self.console.input(PROMPT)
        except EOFError:
            answer = ""
        return is_affirmative(answer)


class AutoApprove:
    """Non-interactive approval for automated contexts."""

    def confirm(self, proposal: ReconcileProposal) -> bool:
        logger.info(
            "Auto-approving %d executor(s) on %s", len(proposal.to_set), proposal.network
        )
        return True


class AlwaysDecline:
    """Rejects every proposal; useful for dry runs."""

    def confirm(self, proposal: ReconcileProposal) -> bool:
        return False


class PolicyFileConfirmation:
    """Approves only proposals whose addresses are all allow-listed.

    The policy file maps network to approved executor addresses::

        {"base": ["0x...", "0x..."]}
    """

    def __init__(self, path: Path) -> None:
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise DeclarationError(f"Cannot read policy file {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise DeclarationError(f"{path}: expected an object keyed by network")
        self._approved: dict[str, set[str]] = {
            network: {str(a).lower() for a in addresses}
            for network, addresses in raw.items()
        }

    def confirm(self, proposal: ReconcileProposal) -> bool:
        approved = self._approved.get(proposal.network, set())
        rejected = [a for a in proposal.addresses if a.lower() not in approved]
        if rejected:
            logger.warning(
                "Policy rejects %d executor(s) on %s: %s",
                len(rejected),
                proposal.network,
                ", ".join(rejected),
            )
            return False
        return True
