"""Per-network deployment parameters.

``DEFAULT_NETWORK_DEFINITIONS`` is the declarative source for every supported
network.  Chain-specific addresses (wrapped native asset, exchange
factories, pool managers) live here and nowhere else.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

PERMIT2_ADDRESS = "0x000000000022D473030F116dDEE9F6B43aC78BA3"


class ExecutorSpec(BaseModel):
    """An executor to deploy on a network.

    ``name`` is the label persisted alongside the deployed address;
    ``contract`` is the artifact to deploy and defaults to ``name``.  Two
    specs may share a contract with different constructor arguments.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    contract: str = ""
    constructor_args: tuple[Any, ...] = ()

    @property
    def artifact_name(self) -> str:
        return self.contract or self.name

    @field_validator("constructor_args", mode="before")
    @classmethod
    def _coerce_args(cls, value: Any) -> Any:
        if isinstance(value, list):
            return tuple(value)
        return value


class NetworkConfig(BaseModel):
    """Immutable deployment parameters for a single network."""

    model_config = ConfigDict(frozen=True)

    network_id: str
    chain_id: int
    permit2: str = PERMIT2_ADDRESS
    weth: str
    is_simulation: bool = False  # pre-production fork (e.g. Tenderly virtual net)
    explorer_chain_id: int | None = None  # chain id the explorer indexes; defaults to chain_id
    executors: tuple[ExecutorSpec, ...] = ()

    @property
    def explorer_chain(self) -> int:
        return self.explorer_chain_id if self.explorer_chain_id is not None else self.chain_id

    @property
    def router_constructor_args(self) -> tuple[str, str]:
        """Constructor arguments for the router: ``(permit2, weth)``."""
        return (self.permit2, self.weth)


_ETHEREUM_EXECUTORS: tuple[ExecutorSpec, ...] = (
    ExecutorSpec(
        name="UniswapV2Executor",
        constructor_args=("0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f",),
    ),
    ExecutorSpec(
        name="SushiSwapV2Executor",
        contract="UniswapV2Executor",
        constructor_args=("0xC0AEe478e3658e2610c5F7A4A2E1777cE9e4f2Ac",),
    ),
    ExecutorSpec(
        name="UniswapV3Executor",
        constructor_args=("0x1F98431c8aD98523631AE4a59f267346ea31F984",),
    ),
    ExecutorSpec(
        name="UniswapV4Executor",
        constructor_args=("0x000000000004444c5dc75cB358380D2e3dE08A90",),
    ),
    ExecutorSpec(name="BalancerV2Executor"),
)

_BASE_EXECUTORS: tuple[ExecutorSpec, ...] = (
    ExecutorSpec(
        name="UniswapV2Executor",
        constructor_args=("0x8909Dc15e40173Ff4699343b6eB8132c65e18eC6",),
    ),
    ExecutorSpec(
        name="UniswapV3Executor",
        constructor_args=("0x33128a8fC17869897dcE68Ed026d694621f6FDfD",),
    ),
    ExecutorSpec(
        name="UniswapV4Executor",
        constructor_args=("0x498581fF718922c3f8e6A244956aF099B2652b2b",),
    ),
)

_UNICHAIN_EXECUTORS: tuple[ExecutorSpec, ...] = (
    ExecutorSpec(
        name="UniswapV2Executor",
        constructor_args=("0x1f98400000000000000000000000000000000002",),
    ),
    ExecutorSpec(
        name="UniswapV3Executor",
        constructor_args=("0x1f98400000000000000000000000000000000003",),
    ),
    ExecutorSpec(
        name="UniswapV4Executor",
        constructor_args=("0x1f98400000000000000000000000000000000004",),
    ),
)

# OP-stack chains share the predeployed WETH address.
_OP_STACK_WETH = "0x4200000000000000000000000000000000000006"

DEFAULT_NETWORK_DEFINITIONS: list[NetworkConfig] = [
    NetworkConfig(
        network_id="ethereum",
        chain_id=1,
        weth="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        executors=_ETHEREUM_EXECUTORS,
    ),
    NetworkConfig(
        network_id="tenderly_ethereum",
        chain_id=1,
        weth="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        is_simulation=True,
        executors=_ETHEREUM_EXECUTORS,
    ),
    NetworkConfig(
        network_id="base",
        chain_id=8453,
        weth=_OP_STACK_WETH,
        executors=_BASE_EXECUTORS,
    ),
    NetworkConfig(
        network_id="tenderly_base",
        chain_id=8453,
        weth=_OP_STACK_WETH,
        is_simulation=True,
        executors=_BASE_EXECUTORS,
    ),
    NetworkConfig(
        network_id="unichain",
        chain_id=130,
        weth=_OP_STACK_WETH,
        executors=_UNICHAIN_EXECUTORS,
    ),
]
