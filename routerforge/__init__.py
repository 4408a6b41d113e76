"""routerforge: deployment and permission orchestration for the router family.

Deploys the router and its executors across networks, verifies each
contract on a simulator and a public explorer, registers executors with the
router, and grants access-control roles from per-network declaration files.
"""

__version__ = "0.1.0"
__description__ = (
    "Deployment, verification and permission orchestration for router/executor contracts"
)

from routerforge.core.orchestrator import DeploymentOrchestrator
from routerforge.cli.app import app as cli

__all__ = ["DeploymentOrchestrator", "cli", "__version__"]
