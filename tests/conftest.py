"""Shared test fixtures for routerforge."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from routerforge.chain.client import ChainClientError, TransactionRevertedError
from routerforge.core.network_resolver import NetworkResolver
from routerforge.models.chain import ContractCall, SignerInfo, TransactionReceipt
from routerforge.models.verification import VerificationResult, VerificationService

# Digit-only addresses are their own checksum form.
ADDR_A = "0x1111111111111111111111111111111111111111"
ADDR_B = "0x2222222222222222222222222222222222222222"
ADDR_C = "0x3333333333333333333333333333333333333333"
SIGNER = "0x4444444444444444444444444444444444444444"


# ---------------------------------------------------------------------------
# Fake chain client
# ---------------------------------------------------------------------------


class FakeChainClient:
    """In-memory ``ChainClient`` that behaves like a router with a registry.

    ``setExecutors`` flips the queried ``executors(address)`` flags, so a
    second reconciliation observes the first one's effect.
    """

    def __init__(
        self,
        executor_flags: dict[str, bool] | None = None,
        fail_when: Callable[[ContractCall], bool] | None = None,
        revert_when: Callable[[ContractCall], bool] | None = None,
    ) -> None:
        self.executor_flags = {a.lower(): v for a, v in (executor_flags or {}).items()}
        self.fail_when = fail_when
        self.revert_when = revert_when
        self.sent: list[ContractCall] = []
        self.queries: list[ContractCall] = []
        self.rpc_calls: list[tuple[str, list[Any]]] = []
        self._receipts: dict[str, TransactionReceipt] = {}

    def get_signer(self) -> SignerInfo:
        return SignerInfo(address=SIGNER, balance_wei=3 * 10**18)

    def send_transaction(self, call: ContractCall) -> str:
        if self.fail_when is not None and self.fail_when(call):
            raise ChainClientError(f"{call.contract}.{call.function} rejected")
        self.sent.append(call)
        n = len(self.sent)
        tx_hash = f"0x{n:064x}"
        reverted = self.revert_when is not None and self.revert_when(call)
        self._receipts[tx_hash] = TransactionReceipt(
            tx_hash=tx_hash,
            status=0 if reverted else 1,
            block_number=100 + n,
            gas_used=21_000,
            contract_address=f"0x{0xC0DE0000 + n:040x}" if call.is_creation else None,
        )
        if call.function == "setExecutors" and not reverted:
            for address in call.args[0]:
                self.executor_flags[address.lower()] = True
        return tx_hash

    def query(self, call: ContractCall) -> Any:
        self.queries.append(call)
        if call.function == "executors":
            return self.executor_flags.get(call.args[0].lower(), False)
        raise ChainClientError(f"unexpected query {call.function}")

    def await_confirmation(self, tx_hash: str) -> TransactionReceipt:
        receipt = self._receipts[tx_hash]
        if not receipt.succeeded:
            raise TransactionRevertedError(receipt)
        return receipt

    def rpc(self, method: str, params: list[Any]) -> Any:
        self.rpc_calls.append((method, params))
        return None

    def sent_functions(self) -> list[str]:
        return [c.function for c in self.sent]


# ---------------------------------------------------------------------------
# Fake verification services
# ---------------------------------------------------------------------------


class FakeSimulator:
    """Records calls; fails or raises for the configured addresses."""

    def __init__(self, fail_for: set[str] = frozenset(), raise_for: set[str] = frozenset()):
        self.fail_for = {a.lower() for a in fail_for}
        self.raise_for = {a.lower() for a in raise_for}
        self.calls: list[tuple[str, str]] = []

    def verify(self, contract: str, address: str) -> VerificationResult:
        self.calls.append((contract, address))
        if address.lower() in self.raise_for:
            raise ChainClientError("simulator unreachable")
        if address.lower() in self.fail_for:
            return VerificationResult.failed(
                contract, address, VerificationService.SIMULATOR, "rejected"
            )
        return VerificationResult.verified(contract, address, VerificationService.SIMULATOR)


class FakeExplorer:
    def __init__(self, fail_for: set[str] = frozenset(), raise_for: set[str] = frozenset()):
        self.fail_for = {a.lower() for a in fail_for}
        self.raise_for = {a.lower() for a in raise_for}
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []

    def verify(
        self, contract: str, address: str, constructor_args: tuple[Any, ...]
    ) -> VerificationResult:
        self.calls.append((contract, address, tuple(constructor_args)))
        if address.lower() in self.raise_for:
            raise ChainClientError("explorer unreachable")
        if address.lower() in self.fail_for:
            return VerificationResult.failed(
                contract, address, VerificationService.EXPLORER, "bytecode mismatch"
            )
        return VerificationResult.verified(contract, address, VerificationService.EXPLORER)


# ---------------------------------------------------------------------------
# Fake HTTP session (requests.Session stand-in)
# ---------------------------------------------------------------------------


class FakeResponse:
    def __init__(self, body: Any = None, status_code: int = 200, text: str = ""):
        self._body = body
        self.status_code = status_code
        self.text = text or (json.dumps(body) if body is not None else "")

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("no JSON body")
        return self._body


class FakeSession:
    """Replays queued responses and records every request."""

    def __init__(self, responses: list[FakeResponse | Exception]):
        self.responses = list(responses)
        self.requests: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_client() -> FakeChainClient:
    """Provide a chain client with an empty executor registry."""
    return FakeChainClient()


@pytest.fixture
def make_client() -> Callable[..., FakeChainClient]:
    """Factory for chain clients with custom flags or failure rules."""
    return FakeChainClient


@pytest.fixture
def make_simulator() -> Callable[..., FakeSimulator]:
    return FakeSimulator


@pytest.fixture
def make_explorer() -> Callable[..., FakeExplorer]:
    return FakeExplorer


@pytest.fixture
def make_session() -> Callable[..., FakeSession]:
    return FakeSession


@pytest.fixture
def make_response() -> Callable[..., FakeResponse]:
    return FakeResponse


@pytest.fixture
def resolver() -> NetworkResolver:
    """Provide a resolver over the built-in network table."""
    return NetworkResolver()


@pytest.fixture
def sleeps() -> list[float]:
    """Collects requested sleep durations instead of sleeping."""
    return []


@pytest.fixture
def executors_file(tmp_path: Path) -> Path:
    """Executor declarations for base: A and B in the mapping shape."""
    path = tmp_path / "executor_addresses.json"
    path.write_text(
        json.dumps({"base": {"UniswapV2Executor": ADDR_A, "UniswapV3Executor": ADDR_B}})
    )
    return path


@pytest.fixture
def roles_file(tmp_path: Path) -> Path:
    """Role declarations for base: PAUSER to A and B, FEE_SETTER empty."""
    path = tmp_path / "roles.json"
    path.write_text(
        json.dumps(
            {
                "EXECUTOR_SETTER_ROLE": {"base": [ADDR_C]},
                "FEE_SETTER_ROLE": {"base": []},
                "PAUSER_ROLE": {"base": [ADDR_A, ADDR_B]},
                "UNPAUSER_ROLE": {"ethereum": [ADDR_A]},
            }
        )
    )
    return path


def write_hardhat_artifact(
    root: Path,
    name: str,
    constructor_inputs: list[dict[str, Any]] | None = None,
    *,
    with_build_info: bool = True,
) -> Path:
    """Write a minimal Hardhat artifact (plus debug and build-info files)."""
    source_dir = root / "contracts" / f"{name}.sol"
    source_dir.mkdir(parents=True, exist_ok=True)
    abi: list[dict[str, Any]] = []
    if constructor_inputs is not None:
        abi.append(
            {"type": "constructor", "inputs": constructor_inputs, "stateMutability": "nonpayable"}
        )
    artifact = {
        "contractName": name,
        "sourceName": f"contracts/{name}.sol",
        "abi": abi,
        "bytecode": "0x6080604052",
    }
    path = source_dir / f"{name}.json"
    path.write_text(json.dumps(artifact))
    if with_build_info:
        build_info_dir = root / "build-info"
        build_info_dir.mkdir(parents=True, exist_ok=True)
        (build_info_dir / "abc123.json").write_text(
            json.dumps(
                {
                    "solcLongVersion": "0.8.26+commit.8a97fa7a",
                    "input": {
                        "language": "Solidity",
                        "sources": {f"contracts/{name}.sol": {"content": "contract X {}"}},
                        "settings": {"optimizer": {"enabled": True, "runs": 200}},
                    },
                }
            )
        )
        (source_dir / f"{name}.dbg.json").write_text(
            json.dumps({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/abc123.json"})
        )
    return path


@pytest.fixture
def artifacts_root(tmp_path: Path) -> Path:
    """A Hardhat artifacts tree with the router and a V3 executor."""
    root = tmp_path / "artifacts"
    write_hardhat_artifact(
        root,
        "TychoRouter",
        [
            {"name": "_permit2", "type": "address"},
            {"name": "_weth", "type": "address"},
        ],
    )
    write_hardhat_artifact(
        root, "UniswapV3Executor", [{"name": "_factory", "type": "address"}]
    )
    write_hardhat_artifact(root, "BalancerV2Executor", with_build_info=False)
    return root
