"""Executor registry reconciliation models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from routerforge.models.chain import TransactionReceipt
from routerforge.models.contracts import ExecutorRegistryEntry


class ReconcileProposal(BaseModel):
    """Declared executors partitioned by their on-chain registration flag."""

    model_config = ConfigDict(frozen=True)

    network: str
    router_address: str
    already_set: list[ExecutorRegistryEntry] = []
    to_set: list[ExecutorRegistryEntry] = []
    gas_limit: int = 0

    @property
    def addresses(self) -> list[str]:
        """Addresses to submit, in declaration order."""
        return [entry.address for entry in self.to_set]

    @property
    def is_empty(self) -> bool:
        return not self.to_set


class ReconcileStatus(str, Enum):
    SUBMITTED = "submitted"
    NO_OP = "no_op"


class ReconcileResult(BaseModel):
    """Outcome of ``ExecutorRegistrySetter.reconcile``."""

    model_config = ConfigDict(frozen=True)

    status: ReconcileStatus
    proposal: ReconcileProposal
    receipt: TransactionReceipt | None = None

    @property
    def is_noop(self) -> bool:
        return self.status == ReconcileStatus.NO_OP
