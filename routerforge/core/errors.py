"""Error taxonomy for routerforge runs.

Fatal errors (``FatalConfigError``, ``DeploymentError``) unwind to the CLI
entry point and terminate the process with a non-zero exit code.
``VerificationError`` is caught at the verification stage that raised it and
reduced to a recorded outcome.  ``UserAborted`` is a clean exit, not a
failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from routerforge.models.reports import DeploymentRunReport


class RouterforgeError(RuntimeError):
    """Base class for all routerforge errors."""


class FatalConfigError(RouterforgeError):
    """Raised before any chain interaction when configuration is unusable."""


class UnsupportedNetwork(FatalConfigError):
    """Raised when a network identifier has no static entry."""

    def __init__(self, network_id: str, supported: list[str] | None = None) -> None:
        self.network_id = network_id
        self.supported = supported or []
        msg = f"Unsupported network: {network_id!r}"
        if self.supported:
            msg += f". Supported: {', '.join(self.supported)}"
        super().__init__(msg)


class MissingConfigError(FatalConfigError):
    """Raised when required environment values are absent."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            "Missing required configuration: " + ", ".join(self.missing)
        )


class DeclarationError(FatalConfigError):
    """Raised when a declaration file is missing or malformed."""


class DeploymentError(RouterforgeError):
    """Raised when a contract-creation transaction cannot be confirmed.

    Deployment is not idempotent, so this error is never retried.  When
    raised from a multi-contract run, ``partial_report`` holds the contracts
    created before the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        contract: str = "",
        partial_report: DeploymentRunReport | None = None,
    ) -> None:
        super().__init__(message)
        self.contract = contract
        self.partial_report = partial_report


class VerificationError(RouterforgeError):
    """Raised by a verification service that rejects or times out."""


class UserAborted(RouterforgeError):
    """Raised when the operator declines a confirmation prompt."""


class InvalidTransitionError(RouterforgeError):
    """Raised when a verification phase transition is not allowed."""
