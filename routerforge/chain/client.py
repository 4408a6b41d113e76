"""Chain-interaction client: the narrow interface the core talks through.

``ChainClient`` is the Protocol the deployment driver, registry setter and
role provisioner depend on.  ``Web3ChainClient`` is the production backend:
an HTTP provider with a single local signing account.  Nonce, fee and gas
handling live here, never in the core.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from web3 import Web3
from web3.contract import Contract

from routerforge.chain.artifacts import ArtifactProvider
from routerforge.core.errors import RouterforgeError
from routerforge.models.chain import ContractCall, SignerInfo, TransactionReceipt

logger = logging.getLogger(__name__)


class ChainClientError(RouterforgeError):
    """Raised by a chain client for transport or signing failures."""


class TransactionRevertedError(ChainClientError):
    """Raised when a confirmed transaction has a failed status."""

    def __init__(self, receipt: TransactionReceipt) -> None:
        self.receipt = receipt
        super().__init__(
            f"Transaction {receipt.tx_hash} reverted in block {receipt.block_number}"
        )


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class ChainClient(Protocol):
    """Protocol for chain-interaction backends."""

    def get_signer(self) -> SignerInfo:
        """Return the run's signing identity."""
        ...

    def send_transaction(self, call: ContractCall) -> str:
        """Sign and submit a state-mutating call; return the transaction hash."""
        ...

    def query(self, call: ContractCall) -> Any:
        """Execute a read-only call and return the decoded value."""
        ...

    def await_confirmation(self, tx_hash: str) -> TransactionReceipt:
        """Block until *tx_hash* is mined; raise if it reverted."""
        ...


# ---------------------------------------------------------------------------
# web3 backend
# ---------------------------------------------------------------------------


class Web3ChainClient:
    """``ChainClient`` over web3.py with a local private key.

    Parameters
    ----------
    rpc_url:
        JSON-RPC endpoint of the target network.
    private_key:
        Hex private key of the signing account.  ``None`` gives a client
        limited to queries and raw RPC.
    artifacts:
        Provider used to resolve contract ABIs and creation bytecode.
    receipt_timeout:
        Seconds to wait for a receipt before web3 raises ``TimeExhausted``.
    """

    def __init__(
        self,
        rpc_url: str,
        private_key: str | None,
        artifacts: ArtifactProvider,
        *,
        receipt_timeout: float = 600.0,
        request_timeout: float = 30.0,
        web3: Web3 | None = None,
    ) -> None:
        self._w3 = web3 or Web3(
            Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": request_timeout})
        )
        self._account = (
            self._w3.eth.account.from_key(private_key) if private_key else None
        )
        self._artifacts = artifacts
        self._receipt_timeout = receipt_timeout

    @property
    def web3(self) -> Web3:
        return self._w3

    def is_connected(self) -> bool:
        return self._w3.is_connected()

    def _signer(self) -> Any:
        if self._account is None:
            raise ChainClientError("No signing key configured")
        return self._account

    def get_signer(self) -> SignerInfo:
        address = self._signer().address
        return SignerInfo(address=address, balance_wei=self._w3.eth.get_balance(address))

    def _contract(self, call: ContractCall) -> type[Contract] | Contract:
        artifact = self._artifacts.get(call.contract)
        if call.is_creation:
            return self._w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        if call.address is None:
            raise ChainClientError(f"{call.contract}.{call.function} needs an address")
        return self._w3.eth.contract(
            address=Web3.to_checksum_address(call.address), abi=artifact.abi
        )

    def send_transaction(self, call: ContractCall) -> str:
        account = self._signer()
        contract = self._contract(call)
        if call.is_creation:
            fn = contract.constructor(*call.args)
        else:
            fn = contract.functions[call.function](*call.args)

        params: dict[str, Any] = {
            "from": account.address,
            "nonce": self._w3.eth.get_transaction_count(account.address, "pending"),
            "chainId": self._w3.eth.chain_id,
        }
        if call.gas_limit is not None:
            params["gas"] = call.gas_limit

        tx = fn.build_transaction(params)
        signed = account.sign_transaction(tx)
        tx_hash = Web3.to_hex(self._w3.eth.send_raw_transaction(signed.raw_transaction))
        logger.info(
            "Submitted %s.%s: %s (nonce=%s)",
            call.contract,
            call.function,
            tx_hash,
            params["nonce"],
        )
        return tx_hash

    def query(self, call: ContractCall) -> Any:
        contract = self._contract(call)
        return contract.functions[call.function](*call.args).call()

    def await_confirmation(self, tx_hash: str) -> TransactionReceipt:
        raw = self._w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self._receipt_timeout
        )
        contract_address = raw.get("contractAddress")
        receipt = TransactionReceipt(
            tx_hash=tx_hash,
            status=int(raw["status"]),
            block_number=int(raw["blockNumber"]),
            gas_used=int(raw["gasUsed"]),
            contract_address=str(contract_address) if contract_address else None,
        )
        if not receipt.succeeded:
            raise TransactionRevertedError(receipt)
        logger.info("Confirmed %s in block %d", tx_hash, receipt.block_number)
        return receipt

    def rpc(self, method: str, params: list[Any]) -> Any:
        """Issue a raw JSON-RPC request (e.g. fork-only ``tenderly_*`` methods)."""
        response = self._w3.provider.make_request(method, params)
        if "error" in response:
            raise ChainClientError(f"{method} failed: {response['error']}")
        return response.get("result")
