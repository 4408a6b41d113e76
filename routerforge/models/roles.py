"""Router access-control roles and role-grant declarations."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from routerforge.models.chain import TransactionReceipt


class RouterRole(str, Enum):
    """Statically known router roles, in provisioning order."""

    EXECUTOR_SETTER_ROLE = "EXECUTOR_SETTER_ROLE"
    FEE_SETTER_ROLE = "FEE_SETTER_ROLE"
    PAUSER_ROLE = "PAUSER_ROLE"
    UNPAUSER_ROLE = "UNPAUSER_ROLE"
    FUND_RESCUER_ROLE = "FUND_RESCUER_ROLE"

    @property
    def role_id(self) -> str:
        """The 32-byte role identifier (keccak-256 of the role name)."""
        return ROLE_IDS[self]


ROLE_IDS: dict[RouterRole, str] = {
    RouterRole.EXECUTOR_SETTER_ROLE: "0x6a1dd52dcad5bd732e45b6af4e7344fa284e2d7d4b23b5b09cb55d36b0685c87",
    RouterRole.FEE_SETTER_ROLE: "0xe6ad9a47fbda1dc18de1eb5eeb7d935e5e81b4748f3cfc61e233e64f88182060",
    RouterRole.PAUSER_ROLE: "0x65d7a28e3265b37a6474929f336521b332c1681b933f6cb9f3376673440d862a",
    RouterRole.UNPAUSER_ROLE: "0x427da25fe773164f88948d3e215c94b6554e2ed5e5f203a821c9f2f6131cf75a",
    RouterRole.FUND_RESCUER_ROLE: "0x912e45d663a6f4cc1d0491d8f046e06c616f40352565ea1cdb86a0e1aaefa41b",
}

KNOWN_ROLE_NAMES: frozenset[str] = frozenset(role.value for role in RouterRole)


class RoleGrantDeclaration(BaseModel):
    """Desired role membership: role name -> network -> ordered addresses."""

    model_config = ConfigDict(frozen=True)

    grants: dict[str, dict[str, list[str]]] = {}

    def addresses_for(self, role: RouterRole | str, network: str) -> list[str]:
        """Declared addresses for *role* on *network*; empty when absent."""
        name = role.value if isinstance(role, RouterRole) else role
        return list(self.grants.get(name, {}).get(network, []))

    def unknown_roles(self) -> list[str]:
        return sorted(name for name in self.grants if name not in KNOWN_ROLE_NAMES)


class RoleGrantStatus(str, Enum):
    GRANTED = "granted"
    SKIPPED = "skipped"
    FAILED = "failed"


class RoleGrantResult(BaseModel):
    """Outcome of provisioning a single role."""

    model_config = ConfigDict(frozen=True)

    role: RouterRole
    addresses: list[str] = []
    status: RoleGrantStatus
    receipt: TransactionReceipt | None = None
    reason: str = ""


class RoleProvisionReport(BaseModel):
    """Per-role outcomes of one provisioning pass, in role order."""

    model_config = ConfigDict(frozen=True)

    network: str
    results: list[RoleGrantResult] = []

    @property
    def receipts(self) -> list[TransactionReceipt]:
        return [r.receipt for r in self.results if r.receipt is not None]

    @property
    def failed(self) -> list[RoleGrantResult]:
        return [r for r in self.results if r.status == RoleGrantStatus.FAILED]
