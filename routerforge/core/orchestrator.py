"""Deployment orchestrator: the deploy-time flow.

Wires the NetworkResolver, DeploymentDriver and VerificationPipeline:

    resolve(network) -> deploy(contract) -> verify(contract) -> next contract

Deployment failures halt the run and carry the partial report so the
operator can see what was already created; verification outcomes never
affect the run's status.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from routerforge.core.deployer import DeploymentDriver
from routerforge.core.errors import DeploymentError, FatalConfigError
from routerforge.core.executor_registry import ROUTER_CONTRACT
from routerforge.core.network_resolver import NetworkResolver
from routerforge.core.verification import VerificationPipeline
from routerforge.models.contracts import DeployedContract
from routerforge.models.network import ExecutorSpec
from routerforge.models.reports import DeploymentRunReport
from routerforge.models.verification import (
    ContractVerificationRecord,
    VerificationReport,
)

logger = logging.getLogger(__name__)


class DeploymentOrchestrator:
    """Sequences contract deployment with per-contract verification.

    Parameters
    ----------
    resolver:
        Network parameter lookup, built once at process start.
    deployer:
        Driver used for every contract-creation transaction.
    verification:
        Pipeline run after each confirmed deployment.
    """

    def __init__(
        self,
        resolver: NetworkResolver,
        deployer: DeploymentDriver,
        verification: VerificationPipeline,
        *,
        router_contract: str = ROUTER_CONTRACT,
    ) -> None:
        self.resolver = resolver
        self.deployer = deployer
        self.verification = verification
        self._router_contract = router_contract

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def deploy_router(self, network: str) -> DeploymentRunReport:
        """Deploy the router with the network's ``(permit2, weth)``."""
        config = self.resolver.resolve(network)
        logger.info(
            "Deploying %s to %s with permit2=%s weth=%s",
            self._router_contract,
            network,
            config.permit2,
            config.weth,
        )
        spec = ExecutorSpec(
            name=self._router_contract,
            constructor_args=config.router_constructor_args,
        )
        return self._run(network, [spec])

    def deploy_executors(
        self, network: str, only: Iterable[str] | None = None
    ) -> DeploymentRunReport:
        """Deploy the network's executors, optionally restricted to *only* names."""
        config = self.resolver.resolve(network)
        specs = list(config.executors)
        if only is not None:
            wanted = list(only)
            unknown = sorted(set(wanted) - {s.name for s in specs})
            if unknown:
                raise FatalConfigError(
                    f"No executor named {', '.join(unknown)} for {network}"
                )
            specs = [s for s in specs if s.name in wanted]
        logger.info("Deploying %d executor(s) to %s", len(specs), network)
        return self._run(network, specs)

    # ------------------------------------------------------------------
    # Sequencing
    # ------------------------------------------------------------------

    def _run(self, network: str, specs: list[ExecutorSpec]) -> DeploymentRunReport:
        report = DeploymentRunReport(network=network)
        deployed: list[DeployedContract] = []
        records: list[ContractVerificationRecord] = []

        for spec in specs:
            try:
                contract = self.deployer.deploy(
                    spec.name, spec.constructor_args, contract=spec.artifact_name
                )
            except DeploymentError as exc:
                exc.partial_report = self._snapshot(report, deployed, records)
                raise
            deployed.append(contract)
            records.append(self.verification.verify(contract))

        return self._snapshot(report, deployed, records)

    @staticmethod
    def _snapshot(
        report: DeploymentRunReport,
        deployed: list[DeployedContract],
        records: list[ContractVerificationRecord],
    ) -> DeploymentRunReport:
        return report.model_copy(
            update={
                "deployed": list(deployed),
                "verification": VerificationReport(records=list(records)),
            }
        )
