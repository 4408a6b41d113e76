"""Verification service Protocols and the shared HTTP plumbing."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import requests

from routerforge.core.errors import VerificationError
from routerforge.models.verification import VerificationResult


@runtime_checkable
class SimulatorVerifier(Protocol):
    """Simulator/trace service: verifies a contract by name and address."""

    def verify(self, contract: str, address: str) -> VerificationResult: ...


@runtime_checkable
class ExplorerVerifier(Protocol):
    """Public explorer: verifies source plus constructor-argument metadata."""

    def verify(
        self, contract: str, address: str, constructor_args: tuple[Any, ...]
    ) -> VerificationResult: ...


class HttpVerifier:
    """Base for verifiers talking JSON over ``requests``."""

    def __init__(
        self, *, timeout: float = 30.0, session: requests.Session | None = None
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise VerificationError(f"{method} {url} failed: {exc}") from exc

    @staticmethod
    def _json(response: requests.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as exc:
            raise VerificationError(
                f"Non-JSON response ({response.status_code}): {response.text[:200]}"
            ) from exc
        if not isinstance(body, dict):
            raise VerificationError(f"Unexpected response body: {body!r}")
        return body
