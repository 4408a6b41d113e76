"""Executor registry reconciliation.

Diffs the declared executors for a network against the router's on-chain
``executors(address)`` flags and submits the difference as a single batched
``setExecutors`` transaction, after explicit operator confirmation.

Running ``reconcile`` again with no intervening change yields ``NO_OP``: the
router enforces single registration and is the source of truth for the
observed state, so nothing is re-derived locally.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from routerforge.chain.client import ChainClient
from routerforge.core.confirmation import ConfirmationProvider
from routerforge.core.declarations import load_executor_declarations
from routerforge.core.errors import UserAborted
from routerforge.models.chain import ContractCall
from routerforge.models.contracts import ExecutorRegistryEntry
from routerforge.models.registry import (
    ReconcileProposal,
    ReconcileResult,
    ReconcileStatus,
)

logger = logging.getLogger(__name__)

ROUTER_CONTRACT = "TychoRouter"
GAS_PER_EXECUTOR = 50_000


class ExecutorRegistrySetter:
    """Computes and applies the minimal executor registration update.

    Parameters
    ----------
    client:
        Chain client; only ``query`` is used while planning.
    confirmation:
        Gate for the batched transaction.
    executors_file:
        Declaration file of executors keyed by network.
    router_address:
        Address of the deployed router.
    gas_per_executor:
        Gas allowance per address; the batch limit scales linearly.
    query_concurrency:
        Maximum concurrent read-only flag lookups.
    """

    def __init__(
        self,
        client: ChainClient,
        confirmation: ConfirmationProvider,
        *,
        executors_file: Path,
        router_address: str,
        gas_per_executor: int = GAS_PER_EXECUTOR,
        query_concurrency: int = 8,
        router_contract: str = ROUTER_CONTRACT,
    ) -> None:
        self._client = client
        self._confirmation = confirmation
        self._executors_file = Path(executors_file)
        self._router_address = router_address
        self._gas_per_executor = gas_per_executor
        self._query_concurrency = max(1, query_concurrency)
        self._router_contract = router_contract

    # ------------------------------------------------------------------
    # Planning (read-only)
    # ------------------------------------------------------------------

    def is_executor_set(self, address: str) -> bool:
        return bool(
            self._client.query(
                ContractCall(
                    contract=self._router_contract,
                    function="executors",
                    args=(address,),
                    address=self._router_address,
                )
            )
        )

    def plan(self, network: str) -> ReconcileProposal:
        """Partition the declared executors into already-set and to-set."""
        declared = self._dedupe(load_executor_declarations(self._executors_file, network))

        # Read-only lookups carry no ordering constraint; map() keeps
        # results aligned with declaration order.
        with ThreadPoolExecutor(max_workers=self._query_concurrency) as pool:
            flags = list(pool.map(self.is_executor_set, [e.address for e in declared]))

        already_set: list[ExecutorRegistryEntry] = []
        to_set: list[ExecutorRegistryEntry] = []
        for entry, is_set in zip(declared, flags):
            (already_set if is_set else to_set).append(entry)

        return ReconcileProposal(
            network=network,
            router_address=self._router_address,
            already_set=already_set,
            to_set=to_set,
            gas_limit=self._gas_per_executor * len(to_set),
        )

    # ------------------------------------------------------------------
    # Apply
    # ------------------------------------------------------------------

    def reconcile(self, network: str) -> ReconcileResult:
        """Bring the router's executor registry in line with the declaration.

        Returns a ``NO_OP`` result when every declared executor is already
        set.  Raises ``UserAborted`` when the confirmation provider declines;
        no transaction is submitted in that case.
        """
        logger.info(
            "Setting executors on %s at %s on %s",
            self._router_contract,
            self._router_address,
            network,
        )
        proposal = self.plan(network)
        for entry in proposal.already_set:
            logger.debug("Executor %s (%s) already set", entry.name, entry.address)

        if proposal.is_empty:
            logger.info("All executors are already set. No changes needed.")
            return ReconcileResult(status=ReconcileStatus.NO_OP, proposal=proposal)

        if not self._confirmation.confirm(proposal):
            logger.info("Operation cancelled by user.")
            raise UserAborted(
                f"Operator declined setting {len(proposal.to_set)} executor(s) on {network}"
            )

        call = ContractCall(
            contract=self._router_contract,
            function="setExecutors",
            args=(proposal.addresses,),
            address=self._router_address,
            gas_limit=proposal.gas_limit,
        )
        tx_hash = self._client.send_transaction(call)
        receipt = self._client.await_confirmation(tx_hash)
        logger.info("Executors set at transaction: %s", receipt.tx_hash)
        return ReconcileResult(
            status=ReconcileStatus.SUBMITTED, proposal=proposal, receipt=receipt
        )

    @staticmethod
    def _dedupe(entries: list[ExecutorRegistryEntry]) -> list[ExecutorRegistryEntry]:
        seen: set[str] = set()
        unique: list[ExecutorRegistryEntry] = []
        for entry in entries:
            key = entry.address.lower()
            if key in seen:
                logger.warning(
                    "Executor %s duplicates address %s; keeping first declaration",
                    entry.name,
                    entry.address,
                )
                continue
            seen.add(key)
            unique.append(entry)
        return unique
