"""Chain-interaction layer: client Protocol, web3 backend, artifacts."""

from routerforge.chain.artifacts import ArtifactError, ArtifactProvider, ContractArtifact
from routerforge.chain.client import (
    ChainClient,
    ChainClientError,
    TransactionRevertedError,
    Web3ChainClient,
)
from routerforge.chain.funding import fund_wallet

__all__ = [
    "ArtifactError",
    "ArtifactProvider",
    "ChainClient",
    "ChainClientError",
    "ContractArtifact",
    "TransactionRevertedError",
    "Web3ChainClient",
    "fund_wallet",
]
