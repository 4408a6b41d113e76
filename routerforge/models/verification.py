"""Verification state machine models.

Each deployed contract moves through a fixed, strictly sequential set of
phases.  Every phase may fail independently; none of them can block the
next contract in a batch.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from routerforge.models.contracts import DeployedContract


class VerificationService(str, Enum):
    """The two independent source-verification services."""

    SIMULATOR = "simulator"
    EXPLORER = "explorer"


class VerificationStatus(str, Enum):
    VERIFIED = "verified"
    FAILED = "failed"
    SKIPPED = "skipped"  # not configured, or already submitted this run


class VerificationPhase(str, Enum):
    """Per-contract verification phase."""

    PENDING = "pending"
    SIMULATOR = "simulator"
    SETTLING = "settling"
    EXPLORER = "explorer"
    COMPLETE = "complete"


# COMPLETE is terminal.  No phase may be re-entered within a run.
VALID_PHASE_TRANSITIONS: dict[VerificationPhase, set[VerificationPhase]] = {
    VerificationPhase.PENDING: {VerificationPhase.SIMULATOR},
    VerificationPhase.SIMULATOR: {VerificationPhase.SETTLING, VerificationPhase.EXPLORER},
    VerificationPhase.SETTLING: {VerificationPhase.EXPLORER},
    VerificationPhase.EXPLORER: {VerificationPhase.COMPLETE},
    VerificationPhase.COMPLETE: set(),
}


class VerificationOutcome(str, Enum):
    """Terminal state of a contract's verification.  All are non-fatal."""

    BOTH_VERIFIED = "both_verified"
    PARTIALLY_VERIFIED = "partially_verified"
    UNVERIFIED = "unverified"


class VerificationResult(BaseModel):
    """Outcome of one (contract, service) verification attempt."""

    model_config = ConfigDict(frozen=True)

    contract: str
    address: str
    service: VerificationService
    status: VerificationStatus
    reason: str = ""

    @classmethod
    def verified(
        cls, contract: str, address: str, service: VerificationService
    ) -> VerificationResult:
        return cls(
            contract=contract,
            address=address,
            service=service,
            status=VerificationStatus.VERIFIED,
        )

    @classmethod
    def failed(
        cls,
        contract: str,
        address: str,
        service: VerificationService,
        reason: str,
    ) -> VerificationResult:
        return cls(
            contract=contract,
            address=address,
            service=service,
            status=VerificationStatus.FAILED,
            reason=reason,
        )

    @property
    def ok(self) -> bool:
        return self.status == VerificationStatus.VERIFIED


class ContractVerificationRecord(BaseModel):
    """Per-contract verification record, aggregated into a run report."""

    model_config = ConfigDict(frozen=True)

    deployed: DeployedContract
    phase: VerificationPhase = VerificationPhase.PENDING
    simulator: VerificationResult | None = None
    explorer: VerificationResult | None = None

    @property
    def outcome(self) -> VerificationOutcome:
        verified = sum(
            1 for r in (self.simulator, self.explorer) if r is not None and r.ok
        )
        if verified == 2:
            return VerificationOutcome.BOTH_VERIFIED
        if verified == 1:
            return VerificationOutcome.PARTIALLY_VERIFIED
        return VerificationOutcome.UNVERIFIED


class VerificationReport(BaseModel):
    """Verification records for a batch of contracts, in deployment order."""

    model_config = ConfigDict(frozen=True)

    records: list[ContractVerificationRecord] = []

    def count(self, outcome: VerificationOutcome) -> int:
        return sum(1 for r in self.records if r.outcome == outcome)
