"""Chain-interaction models shared by the core and the chain client."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

CONSTRUCTOR = "constructor"


class ContractCall(BaseModel):
    """A call against a contract's interface.

    A call with ``address=None`` and ``function="constructor"`` is a
    contract creation.
    """

    model_config = ConfigDict(frozen=True)

    contract: str  # artifact name resolved by the ArtifactProvider
    function: str
    args: tuple[Any, ...] = ()
    address: str | None = None
    gas_limit: int | None = None  # None: let the client estimate

    @field_validator("args", mode="before")
    @classmethod
    def _coerce_args(cls, value: Any) -> Any:
        if isinstance(value, list):
            return tuple(value)
        return value

    @property
    def is_creation(self) -> bool:
        return self.address is None and self.function == CONSTRUCTOR


class TransactionReceipt(BaseModel):
    """A confirmed transaction."""

    model_config = ConfigDict(frozen=True)

    tx_hash: str
    status: int = 1
    block_number: int = 0
    gas_used: int = 0
    contract_address: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == 1


class SignerInfo(BaseModel):
    """The signing identity used for every state-mutating call of a run."""

    model_config = ConfigDict(frozen=True)

    address: str
    balance_wei: int = 0

    @property
    def balance_ether(self) -> float:
        return self.balance_wei / 10**18
