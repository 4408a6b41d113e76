"""Tests for the Rich report renderer."""

from __future__ import annotations

import io

from rich.console import Console

from routerforge.models.chain import SignerInfo, TransactionReceipt
from routerforge.models.contracts import DeployedContract, ExecutorRegistryEntry
from routerforge.models.registry import ReconcileProposal, ReconcileResult, ReconcileStatus
from routerforge.models.reports import DeploymentRunReport
from routerforge.models.roles import RoleGrantResult, RoleGrantStatus, RoleProvisionReport, RouterRole
from routerforge.models.verification import (
    ContractVerificationRecord,
    VerificationReport,
    VerificationResult,
    VerificationService,
)
from routerforge.monitor.renderer import ReportRenderer

ADDRESS = "0x1111111111111111111111111111111111111111"


def _renderer() -> tuple[ReportRenderer, io.StringIO]:
    output = io.StringIO()
    return ReportRenderer(Console(file=output, width=200)), output


class TestReportRenderer:
    def test_deployment_report(self):
        deployed = DeployedContract(
            logical_name="UniswapV3Executor", contract="UniswapV3Executor", address=ADDRESS
        )
        record = ContractVerificationRecord(
            deployed=deployed,
            simulator=VerificationResult.verified(
                "UniswapV3Executor", ADDRESS, VerificationService.SIMULATOR
            ),
            explorer=VerificationResult.failed(
                "UniswapV3Executor", ADDRESS, VerificationService.EXPLORER, "timeout"
            ),
        )
        report = DeploymentRunReport(
            network="base",
            deployed=[deployed],
            verification=VerificationReport(records=[record]),
        )
        renderer, output = _renderer()
        renderer.print_deployment(report)
        text = output.getvalue()
        assert "UniswapV3Executor" in text
        assert ADDRESS in text
        assert "partially verified" in text
        assert report.run_id in text

    def test_reconcile_noop(self):
        renderer, output = _renderer()
        proposal = ReconcileProposal(network="base", router_address=ADDRESS)
        renderer.print_reconcile(ReconcileResult(status=ReconcileStatus.NO_OP, proposal=proposal))
        assert "already set" in output.getvalue()

    def test_reconcile_submitted(self):
        renderer, output = _renderer()
        proposal = ReconcileProposal(
            network="base",
            router_address=ADDRESS,
            to_set=[ExecutorRegistryEntry(name="A", address=ADDRESS)],
        )
        renderer.print_reconcile(
            ReconcileResult(
                status=ReconcileStatus.SUBMITTED,
                proposal=proposal,
                receipt=TransactionReceipt(tx_hash="0xfeed"),
            )
        )
        assert "0xfeed" in output.getvalue()

    def test_roles_table(self):
        report = RoleProvisionReport(
            network="base",
            results=[
                RoleGrantResult(
                    role=RouterRole.PAUSER_ROLE,
                    addresses=[ADDRESS],
                    status=RoleGrantStatus.GRANTED,
                    receipt=TransactionReceipt(tx_hash="0xbeef"),
                ),
                RoleGrantResult(role=RouterRole.FEE_SETTER_ROLE, status=RoleGrantStatus.SKIPPED),
            ],
        )
        renderer, output = _renderer()
        renderer.print_roles(report)
        text = output.getvalue()
        assert "PAUSER_ROLE" in text
        assert "0xbeef" in text
        assert "SKIPPED" in text

    def test_signer(self):
        renderer, output = _renderer()
        renderer.print_signer(SignerInfo(address=ADDRESS, balance_wei=15 * 10**17), "Deploying")
        text = output.getvalue()
        assert f"Deploying with account: {ADDRESS}" in text
        assert "1.500000 ETH" in text
