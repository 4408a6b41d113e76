"""Contract deployment driver.

One call, one contract-creation transaction.  The driver blocks until the
creation is confirmed and never retries: deployment is not idempotent, so a
failure is surfaced to the caller and the run halts.
"""

from __future__ import annotations

import logging
from typing import Any

from routerforge.chain.client import ChainClient
from routerforge.core.errors import DeploymentError
from routerforge.models.chain import CONSTRUCTOR, ContractCall
from routerforge.models.contracts import DeployedContract

logger = logging.getLogger(__name__)


class DeploymentDriver:
    """Deploys contracts through a ``ChainClient``."""

    def __init__(self, client: ChainClient) -> None:
        self._client = client

    def deploy(
        self,
        logical_name: str,
        constructor_args: tuple[Any, ...] | list[Any] = (),
        *,
        contract: str | None = None,
    ) -> DeployedContract:
        """Create *contract* (defaults to *logical_name*) and await confirmation.

        Raises
        ------
        DeploymentError
            On rejection, revert, confirmation timeout, insufficient funds,
            or a missing artifact.  Never retried.
        """
        artifact_name = contract or logical_name
        args = tuple(constructor_args)
        call = ContractCall(contract=artifact_name, function=CONSTRUCTOR, args=args)

        logger.info("Deploying %s (%s) with args %s", logical_name, artifact_name, list(args))
        try:
            tx_hash = self._client.send_transaction(call)
            receipt = self._client.await_confirmation(tx_hash)
        except Exception as exc:
            logger.error("Deployment of %s failed: %s", logical_name, exc)
            raise DeploymentError(
                f"Deployment of {logical_name} failed: {exc}", contract=logical_name
            ) from exc

        if not receipt.contract_address:
            raise DeploymentError(
                f"Deployment of {logical_name} confirmed in {receipt.tx_hash} "
                "without a contract address",
                contract=logical_name,
            )

        deployed = DeployedContract(
            logical_name=logical_name,
            contract=artifact_name,
            address=receipt.contract_address,
            constructor_args=args,
            tx_hash=receipt.tx_hash,
            block_number=receipt.block_number,
        )
        logger.info("%s deployed to: %s", logical_name, deployed.address)
        return deployed
