"""Etherscan source verification (public explorer, v2 multichain API).

Submission returns a GUID; the verdict is polled with ``checkverifystatus``
a bounded number of times.  A contract that is already verified counts as
verified.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from typing import Any

import requests

from routerforge.chain.artifacts import ArtifactProvider
from routerforge.core.errors import VerificationError
from routerforge.models.verification import VerificationResult, VerificationService
from routerforge.verify.base import HttpVerifier

logger = logging.getLogger(__name__)

_PENDING = "pending in queue"
_ALREADY_VERIFIED = "already verified"
_PASS = "pass - verified"


class EtherscanVerifier(HttpVerifier):
    """Submits standard-JSON source verification to Etherscan."""

    service = VerificationService.EXPLORER

    def __init__(
        self,
        *,
        api_key: str,
        chain_id: int,
        artifacts: ArtifactProvider,
        api_url: str = "https://api.etherscan.io/v2/api",
        max_polls: int = 10,
        poll_interval: float = 5.0,
        sleep: Callable[[float], None] = time.sleep,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(timeout=timeout, session=session)
        self._api_key = api_key
        self._chain_id = chain_id
        self._artifacts = artifacts
        self._api_url = api_url
        self._max_polls = max_polls
        self._poll_interval = poll_interval
        self._sleep = sleep

    def verify(
        self, contract: str, address: str, constructor_args: tuple[Any, ...]
    ) -> VerificationResult:
        artifact = self._artifacts.get(contract)
        if artifact.compiler_input is None:
            return VerificationResult.failed(
                contract, address, self.service, "no compiler input in build info"
            )

        data = {
            "apikey": self._api_key,
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": address,
            "sourceCode": json.dumps(artifact.compiler_input),
            "codeformat": "solidity-standard-json-input",
            "contractname": artifact.fully_qualified_name,
            "compilerversion": f"v{artifact.compiler_version}",
            # Etherscan's parameter name is misspelled upstream.
            "constructorArguements": artifact.encode_constructor_args(constructor_args),
        }
        logger.info("Submitting %s at %s to Etherscan", contract, address)
        body = self._json(
            self._request(
                "POST", self._api_url, params={"chainid": self._chain_id}, data=data
            )
        )
        result = str(body.get("result", ""))

        if body.get("status") != "1":
            if _ALREADY_VERIFIED in result.lower():
                return VerificationResult.verified(contract, address, self.service)
            return VerificationResult.failed(contract, address, self.service, result)

        return self._poll(contract, address, guid=result)

    def _poll(self, contract: str, address: str, guid: str) -> VerificationResult:
        params = {
            "chainid": self._chain_id,
            "apikey": self._api_key,
            "module": "contract",
            "action": "checkverifystatus",
            "guid": guid,
        }
        for _ in range(self._max_polls):
            self._sleep(self._poll_interval)
            body = self._json(self._request("GET", self._api_url, params=params))
            verdict = str(body.get("result", "")).lower()
            if verdict.startswith(_PENDING):
                continue
            if verdict.startswith(_PASS) or _ALREADY_VERIFIED in verdict:
                return VerificationResult.verified(contract, address, self.service)
            return VerificationResult.failed(
                contract, address, self.service, str(body.get("result", ""))
            )
        raise VerificationError(
            f"Etherscan verification of {contract} still pending after "
            f"{self._max_polls} polls (guid={guid})"
        )
