"""Deployed contracts and executor registry entries."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class DeployedContract(BaseModel):
    """A contract created by the deployment driver.  Immutable."""

    model_config = ConfigDict(frozen=True)

    logical_name: str
    contract: str  # artifact name, differs from logical_name for duplicates
    address: str
    constructor_args: tuple[Any, ...] = ()
    tx_hash: str = ""
    block_number: int = 0


class ExecutorRegistryEntry(BaseModel):
    """A declared executor: desired registry state for one address."""

    model_config = ConfigDict(frozen=True)

    name: str
    address: str
