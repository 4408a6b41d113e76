"""Two-stage, failure-isolated source verification.

Per deployed contract, strictly sequential:

    PENDING -> SIMULATOR -> SETTLING -> EXPLORER -> COMPLETE

1. Simulator verification runs immediately after deployment.
2. Settling delay: explorers reject verification of creations their indexer
   has not yet observed, so the pipeline waits a fixed interval.
3. Explorer verification submits source and constructor arguments.

A failure at any stage is logged and recorded; it never blocks the next
stage or the next contract, and nothing is retried within a run.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from routerforge.core.errors import InvalidTransitionError
from routerforge.models.contracts import DeployedContract
from routerforge.models.verification import (
    VALID_PHASE_TRANSITIONS,
    ContractVerificationRecord,
    VerificationPhase,
    VerificationReport,
    VerificationResult,
    VerificationService,
    VerificationStatus,
)
from routerforge.verify.base import ExplorerVerifier, SimulatorVerifier

logger = logging.getLogger(__name__)

DEFAULT_SETTLING_DELAY = 60.0


class VerificationPipeline:
    """Runs the verification state machine for deployed contracts.

    Parameters
    ----------
    simulator:
        Simulator/trace verification service, or ``None`` to skip stage 1.
    explorer:
        Public explorer verification service, or ``None`` to skip stage 3
        (and the settling delay).
    settling_delay:
        Seconds to wait between simulator and explorer verification.
    sleep:
        Blocking sleep used for the settling delay.
    """

    def __init__(
        self,
        simulator: SimulatorVerifier | None = None,
        explorer: ExplorerVerifier | None = None,
        *,
        settling_delay: float = DEFAULT_SETTLING_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._simulator = simulator
        self._explorer = explorer
        self._settling_delay = settling_delay
        self._sleep = sleep
        # (address, service) pairs already attempted in this pipeline's lifetime
        self._attempted: set[tuple[str, VerificationService]] = set()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def verify(self, deployed: DeployedContract) -> ContractVerificationRecord:
        """Run all stages for one contract and return its terminal record."""
        for service in VerificationService:
            if (deployed.address.lower(), service) in self._attempted:
                raise InvalidTransitionError(
                    f"{deployed.logical_name} at {deployed.address} was already "
                    f"submitted to the {service.value} service in this run"
                )

        record = ContractVerificationRecord(deployed=deployed)

        record = self._advance(record, VerificationPhase.SIMULATOR)
        record = record.model_copy(
            update={"simulator": self._run_simulator(deployed)}
        )

        if self._explorer is not None:
            record = self._advance(record, VerificationPhase.SETTLING)
            logger.info(
                "Waiting %.0f seconds before verifying %s on the explorer...",
                self._settling_delay,
                deployed.logical_name,
            )
            self._sleep(self._settling_delay)

        record = self._advance(record, VerificationPhase.EXPLORER)
        record = record.model_copy(update={"explorer": self._run_explorer(deployed)})

        record = self._advance(record, VerificationPhase.COMPLETE)
        logger.info(
            "%s at %s: %s", deployed.logical_name, deployed.address, record.outcome.value
        )
        return record

    def verify_batch(self, contracts: Iterable[DeployedContract]) -> VerificationReport:
        """Verify each contract in order; one contract's failures never stop the next.

        A contract already submitted in this run is recorded with both stages
        skipped instead of being sent again.
        """
        records: list[ContractVerificationRecord] = []
        for deployed in contracts:
            try:
                records.append(self.verify(deployed))
            except InvalidTransitionError as exc:
                logger.warning("Skipping verification: %s", exc)
                reason = "already submitted in this run"
                records.append(
                    ContractVerificationRecord(
                        deployed=deployed,
                        phase=VerificationPhase.COMPLETE,
                        simulator=self._skipped(
                            deployed, VerificationService.SIMULATOR, reason
                        ),
                        explorer=self._skipped(
                            deployed, VerificationService.EXPLORER, reason
                        ),
                    )
                )
        return VerificationReport(records=records)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _run_simulator(self, deployed: DeployedContract) -> VerificationResult:
        service = VerificationService.SIMULATOR
        if self._simulator is None:
            return self._skipped(deployed, service)
        self._attempted.add((deployed.address.lower(), service))
        try:
            result = self._simulator.verify(deployed.contract, deployed.address)
        except Exception as exc:  # noqa: BLE001
            result = VerificationResult.failed(
                deployed.contract, deployed.address, service, str(exc)
            )
        return self._log_result(deployed, result)

    def _run_explorer(self, deployed: DeployedContract) -> VerificationResult:
        service = VerificationService.EXPLORER
        if self._explorer is None:
            return self._skipped(deployed, service)
        self._attempted.add((deployed.address.lower(), service))
        try:
            result = self._explorer.verify(
                deployed.contract, deployed.address, deployed.constructor_args
            )
        except Exception as exc:  # noqa: BLE001
            result = VerificationResult.failed(
                deployed.contract, deployed.address, service, str(exc)
            )
        return self._log_result(deployed, result)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _advance(
        record: ContractVerificationRecord, target: VerificationPhase
    ) -> ContractVerificationRecord:
        allowed = VALID_PHASE_TRANSITIONS.get(record.phase, set())
        if target not in allowed:
            raise InvalidTransitionError(
                f"Cannot move {record.deployed.logical_name} from "
                f"{record.phase.value} to {target.value}. "
                f"Allowed: {[p.value for p in allowed]}"
            )
        return record.model_copy(update={"phase": target})

    @staticmethod
    def _skipped(
        deployed: DeployedContract,
        service: VerificationService,
        reason: str = "service not configured",
    ) -> VerificationResult:
        logger.info(
            "Skipping %s verification of %s: %s",
            service.value,
            deployed.logical_name,
            reason,
        )
        return VerificationResult(
            contract=deployed.contract,
            address=deployed.address,
            service=service,
            status=VerificationStatus.SKIPPED,
            reason=reason,
        )

    @staticmethod
    def _log_result(
        deployed: DeployedContract, result: VerificationResult
    ) -> VerificationResult:
        if result.ok:
            logger.info(
                "%s verified successfully on %s", deployed.logical_name, result.service.value
            )
        else:
            logger.error(
                "Error during %s verification of %s: %s",
                result.service.value,
                deployed.logical_name,
                result.reason,
            )
        return result
