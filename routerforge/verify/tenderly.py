"""Tenderly source verification (simulator/trace service)."""

from __future__ import annotations

import logging

import requests

from routerforge.chain.artifacts import ArtifactProvider
from routerforge.models.verification import VerificationResult, VerificationService
from routerforge.verify.base import HttpVerifier

logger = logging.getLogger(__name__)


class TenderlyVerifier(HttpVerifier):
    """Verifies contracts in a private Tenderly project.

    Parameters
    ----------
    account, project, access_key:
        Tenderly account slug, project slug and API access key.
    chain_id:
        Chain the contract lives on (forks share their parent's id).
    artifacts:
        Source of the standard-JSON compiler input for each contract.
    """

    service = VerificationService.SIMULATOR

    def __init__(
        self,
        *,
        account: str,
        project: str,
        access_key: str,
        chain_id: int,
        artifacts: ArtifactProvider,
        api_url: str = "https://api.tenderly.co/api/v1",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(timeout=timeout, session=session)
        self._url = f"{api_url.rstrip('/')}/account/{account}/project/{project}/contracts"
        self._access_key = access_key
        self._chain_id = chain_id
        self._artifacts = artifacts

    def verify(self, contract: str, address: str) -> VerificationResult:
        artifact = self._artifacts.get(contract)
        if artifact.compiler_input is None:
            return VerificationResult.failed(
                contract, address, self.service, "no compiler input in build info"
            )

        payload = {
            "contracts": [
                {
                    "contractToVerify": artifact.fully_qualified_name,
                    "sources": artifact.compiler_input.get("sources", {}),
                    "compiler": {
                        "version": artifact.compiler_version,
                        "settings": artifact.compiler_input.get("settings", {}),
                    },
                    "networks": {str(self._chain_id): {"address": address}},
                }
            ]
        }
        logger.info("Verifying %s at %s on Tenderly", contract, address)
        response = self._request(
            "POST",
            self._url,
            json=payload,
            headers={"X-Access-Key": self._access_key},
        )
        if response.ok:
            return VerificationResult.verified(contract, address, self.service)
        return VerificationResult.failed(
            contract,
            address,
            self.service,
            f"HTTP {response.status_code}: {response.text[:200]}",
        )
