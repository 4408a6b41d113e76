"""Tests for DeploymentOrchestrator: deploy/verify sequencing and halting."""

from __future__ import annotations

import pytest

from routerforge.core.deployer import DeploymentDriver
from routerforge.core.errors import DeploymentError, FatalConfigError, UnsupportedNetwork
from routerforge.core.orchestrator import DeploymentOrchestrator
from routerforge.core.verification import VerificationPipeline
from routerforge.models.network import PERMIT2_ADDRESS
from routerforge.models.verification import VerificationOutcome


@pytest.fixture
def pipeline(make_simulator, make_explorer, sleeps) -> VerificationPipeline:
    return VerificationPipeline(make_simulator(), make_explorer(), sleep=sleeps.append)


def _orchestrator(client, resolver, pipeline) -> DeploymentOrchestrator:
    return DeploymentOrchestrator(resolver, DeploymentDriver(client), pipeline)


class TestDeployRouter:
    def test_router_gets_permit2_and_weth(self, fake_client, resolver, pipeline):
        report = _orchestrator(fake_client, resolver, pipeline).deploy_router("base")

        (call,) = fake_client.sent
        assert call.contract == "TychoRouter"
        assert call.args == (PERMIT2_ADDRESS, "0x4200000000000000000000000000000000000006")
        assert report.network == "base"
        assert report.run_id.startswith("rf-")
        assert [c.logical_name for c in report.deployed] == ["TychoRouter"]
        assert report.verification.count(VerificationOutcome.BOTH_VERIFIED) == 1

    def test_custom_router_contract(self, fake_client, resolver, pipeline):
        orchestrator = DeploymentOrchestrator(
            resolver, DeploymentDriver(fake_client), pipeline, router_contract="RouterV2"
        )
        orchestrator.deploy_router("unichain")
        assert fake_client.sent[0].contract == "RouterV2"

    def test_unknown_network_touches_nothing(self, fake_client, resolver, pipeline):
        with pytest.raises(UnsupportedNetwork):
            _orchestrator(fake_client, resolver, pipeline).deploy_router("polygon")
        assert fake_client.sent == []


class TestDeployExecutors:
    def test_deploys_and_verifies_each_in_turn(
        self, fake_client, resolver, make_simulator, make_explorer, sleeps
    ):
        simulator, explorer = make_simulator(), make_explorer()
        pipeline = VerificationPipeline(simulator, explorer, sleep=sleeps.append)
        report = _orchestrator(fake_client, resolver, pipeline).deploy_executors("ethereum")

        names = [s.name for s in resolver.resolve("ethereum").executors]
        assert [c.logical_name for c in report.deployed] == names
        assert [c.contract for c in fake_client.sent] == [
            s.artifact_name for s in resolver.resolve("ethereum").executors
        ]
        assert [a for _, a in simulator.calls] == [c.address for c in report.deployed]
        assert len(report.verification.records) == len(names)

    def test_only_filters_by_name(self, fake_client, resolver, pipeline):
        report = _orchestrator(fake_client, resolver, pipeline).deploy_executors(
            "base", only=["UniswapV4Executor"]
        )
        assert [c.logical_name for c in report.deployed] == ["UniswapV4Executor"]
        assert len(fake_client.sent) == 1

    def test_only_with_unknown_name(self, fake_client, resolver, pipeline):
        with pytest.raises(FatalConfigError, match="CurveExecutor"):
            _orchestrator(fake_client, resolver, pipeline).deploy_executors(
                "base", only=["CurveExecutor"]
            )
        assert fake_client.sent == []

    def test_verification_failures_do_not_halt(
        self, fake_client, resolver, make_simulator, make_explorer, sleeps
    ):
        pipeline = VerificationPipeline(
            make_simulator(raise_for={f"0x{0xC0DE0001:040x}"}),
            make_explorer(raise_for={f"0x{0xC0DE0001:040x}"}),
            sleep=sleeps.append,
        )
        report = _orchestrator(fake_client, resolver, pipeline).deploy_executors("base")
        assert len(report.deployed) == 3
        assert report.verification.records[0].outcome == VerificationOutcome.UNVERIFIED
        assert report.verification.count(VerificationOutcome.BOTH_VERIFIED) == 2

    def test_deployment_failure_halts_with_partial_report(
        self, make_client, resolver, pipeline
    ):
        client = make_client(fail_when=lambda call: call.contract == "UniswapV4Executor")
        with pytest.raises(DeploymentError) as excinfo:
            _orchestrator(client, resolver, pipeline).deploy_executors("base")

        partial = excinfo.value.partial_report
        assert excinfo.value.contract == "UniswapV4Executor"
        assert [c.logical_name for c in partial.deployed] == [
            "UniswapV2Executor",
            "UniswapV3Executor",
        ]
        assert len(partial.verification.records) == 2
        assert partial.network == "base"
