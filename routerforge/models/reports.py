"""Per-run deployment report."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from routerforge.models.contracts import DeployedContract
from routerforge.models.verification import VerificationReport


class DeploymentRunReport(BaseModel):
    """Contracts created by a deployment run and their verification records.

    The run's exit status depends only on ``deployed``; verification
    outcomes are informational.
    """

    model_config = ConfigDict(frozen=True)

    run_id: str = Field(default_factory=lambda: f"rf-{uuid.uuid4().hex[:12]}")
    network: str
    deployed: list[DeployedContract] = []
    verification: VerificationReport = VerificationReport()
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
