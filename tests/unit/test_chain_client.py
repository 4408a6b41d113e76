"""Tests for Web3ChainClient: receipts, reverts, raw RPC, key handling.

web3 is replaced by a namespace exposing only the attributes each test
touches, so nothing leaves the process.
"""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
from eth_account import Account

from routerforge.chain.artifacts import ArtifactProvider
from routerforge.chain.client import (
    ChainClient,
    ChainClientError,
    TransactionRevertedError,
    Web3ChainClient,
)
from routerforge.models.chain import ContractCall

TEST_KEY = "0x" + "4c" * 32


class _Provider:
    def __init__(self, response: dict[str, Any]) -> None:
        self.response = response
        self.requests: list[tuple[str, list[Any]]] = []

    def make_request(self, method: str, params: list[Any]) -> dict[str, Any]:
        self.requests.append((method, params))
        return self.response


def _fake_web3(receipt: dict[str, Any] | None = None, rpc_response=None) -> SimpleNamespace:
    return SimpleNamespace(
        provider=_Provider(rpc_response or {"jsonrpc": "2.0", "id": 1, "result": True}),
        eth=SimpleNamespace(
            account=Account,
            get_balance=lambda address: 2 * 10**18,
            wait_for_transaction_receipt=lambda tx_hash, timeout: receipt,
        ),
    )


def _client(tmp_path: Path, web3, private_key: str | None = TEST_KEY) -> Web3ChainClient:
    return Web3ChainClient(
        "http://localhost:8545", private_key, ArtifactProvider(tmp_path), web3=web3
    )


class TestWeb3ChainClient:
    def test_satisfies_protocol(self, tmp_path: Path):
        assert isinstance(_client(tmp_path, _fake_web3()), ChainClient)

    def test_signer_from_private_key(self, tmp_path: Path):
        signer = _client(tmp_path, _fake_web3()).get_signer()
        assert signer.address == Account.from_key(TEST_KEY).address
        assert signer.balance_ether == pytest.approx(2.0)

    def test_keyless_client_cannot_sign(self, tmp_path: Path):
        client = _client(tmp_path, _fake_web3(), private_key=None)
        with pytest.raises(ChainClientError, match="No signing key"):
            client.get_signer()
        with pytest.raises(ChainClientError, match="No signing key"):
            client.send_transaction(ContractCall(contract="X", function="constructor"))

    def test_await_confirmation_creation(self, tmp_path: Path):
        receipt = {
            "status": 1,
            "blockNumber": 19_000_000,
            "gasUsed": 1_234_567,
            "contractAddress": "0x1111111111111111111111111111111111111111",
        }
        result = _client(tmp_path, _fake_web3(receipt)).await_confirmation("0xabc")
        assert result.tx_hash == "0xabc"
        assert result.block_number == 19_000_000
        assert result.contract_address == "0x1111111111111111111111111111111111111111"

    def test_await_confirmation_call_has_no_address(self, tmp_path: Path):
        receipt = {"status": 1, "blockNumber": 5, "gasUsed": 50_000, "contractAddress": None}
        result = _client(tmp_path, _fake_web3(receipt)).await_confirmation("0xdef")
        assert result.contract_address is None

    def test_reverted_receipt_raises(self, tmp_path: Path):
        receipt = {"status": 0, "blockNumber": 7, "gasUsed": 50_000}
        with pytest.raises(TransactionRevertedError) as excinfo:
            _client(tmp_path, _fake_web3(receipt)).await_confirmation("0xbad")
        assert excinfo.value.receipt.block_number == 7

    def test_raw_rpc(self, tmp_path: Path):
        web3 = _fake_web3()
        result = _client(tmp_path, web3, private_key=None).rpc("evm_mine", [])
        assert result is True
        assert web3.provider.requests == [("evm_mine", [])]

    def test_raw_rpc_error(self, tmp_path: Path):
        web3 = _fake_web3(rpc_response={"error": {"code": -32601, "message": "not found"}})
        with pytest.raises(ChainClientError, match="tenderly_setBalance failed"):
            _client(tmp_path, web3).rpc("tenderly_setBalance", [])
