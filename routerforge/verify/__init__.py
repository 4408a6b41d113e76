"""Source-verification service clients."""

from routerforge.verify.base import ExplorerVerifier, SimulatorVerifier
from routerforge.verify.etherscan import EtherscanVerifier
from routerforge.verify.tenderly import TenderlyVerifier

__all__ = [
    "EtherscanVerifier",
    "ExplorerVerifier",
    "SimulatorVerifier",
    "TenderlyVerifier",
]
