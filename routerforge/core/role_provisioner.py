"""Role grant provisioning.

For every statically known router role, in a fixed order, submit one
``batchGrantRole`` transaction covering the addresses declared for the
network.  Each grant is awaited before the next is submitted, since all of
them share one signing account.  A failure for one role is recorded and the
next role is still attempted.
"""

from __future__ import annotations

import logging
from pathlib import Path

from routerforge.chain.client import ChainClient
from routerforge.core.declarations import load_role_declarations
from routerforge.core.executor_registry import ROUTER_CONTRACT
from routerforge.models.chain import ContractCall
from routerforge.models.roles import (
    RoleGrantResult,
    RoleGrantStatus,
    RoleProvisionReport,
    RouterRole,
)

logger = logging.getLogger(__name__)


class RoleGrantProvisioner:
    """Grants declared router roles, one batched transaction per role.

    Granting a role an address already holds is not an error: the router's
    access control treats it as a no-op.
    """

    def __init__(
        self,
        client: ChainClient,
        *,
        roles_file: Path,
        router_address: str,
        router_contract: str = ROUTER_CONTRACT,
    ) -> None:
        self._client = client
        self._roles_file = Path(roles_file)
        self._router_address = router_address
        self._router_contract = router_contract

    def provision(self, network: str) -> RoleProvisionReport:
        logger.info(
            "Setting roles on %s at %s on %s",
            self._router_contract,
            self._router_address,
            network,
        )
        declaration = load_role_declarations(self._roles_file)
        for name in declaration.unknown_roles():
            logger.warning("Ignoring unknown role %s in %s", name, self._roles_file)

        results: list[RoleGrantResult] = []
        for role in RouterRole:
            addresses = declaration.addresses_for(role, network)
            if not addresses:
                logger.info("No addresses found for role %s", role.value)
                results.append(
                    RoleGrantResult(role=role, status=RoleGrantStatus.SKIPPED)
                )
                continue
            results.append(self._grant(role, addresses))

        return RoleProvisionReport(network=network, results=results)

    def _grant(self, role: RouterRole, addresses: list[str]) -> RoleGrantResult:
        logger.info(
            "Granting %s to the following addresses: %s", role.value, ", ".join(addresses)
        )
        call = ContractCall(
            contract=self._router_contract,
            function="batchGrantRole",
            args=(role.role_id, addresses),
            address=self._router_address,
        )
        try:
            tx_hash = self._client.send_transaction(call)
            receipt = self._client.await_confirmation(tx_hash)
        except Exception as exc:  # noqa: BLE001
            logger.error("Granting %s failed: %s", role.value, exc)
            return RoleGrantResult(
                role=role,
                addresses=addresses,
                status=RoleGrantStatus.FAILED,
                reason=str(exc),
            )

        logger.info("Role %s granted at transaction: %s", role.value, receipt.tx_hash)
        return RoleGrantResult(
            role=role,
            addresses=addresses,
            status=RoleGrantStatus.GRANTED,
            receipt=receipt,
        )
