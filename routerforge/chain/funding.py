"""Top up a wallet's balance on a simulation fork."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from web3 import Web3

from routerforge.core.errors import FatalConfigError
from routerforge.models.network import NetworkConfig

logger = logging.getLogger(__name__)


class RawRpcClient(Protocol):
    def rpc(self, method: str, params: list[Any]) -> Any: ...


def fund_wallet(
    client: RawRpcClient,
    network: NetworkConfig,
    address: str,
    amount_ether: float = 10.0,
) -> Any:
    """Set *address*'s balance to *amount_ether* via ``tenderly_setBalance``.

    Only simulation networks accept this call; real networks are refused
    before any request is made.
    """
    if not network.is_simulation:
        raise FatalConfigError(
            f"Refusing to fund a wallet on {network.network_id}: not a simulation network"
        )
    checksum = Web3.to_checksum_address(address)
    balance_hex = Web3.to_hex(Web3.to_wei(amount_ether, "ether"))
    logger.info(
        "Funding wallet %s with %s ETH on %s", checksum, amount_ether, network.network_id
    )
    return client.rpc("tenderly_setBalance", [[checksum], balance_hex])
