"""routerforge data models: all Pydantic v2, all frozen (immutable)."""

from routerforge.models.chain import ContractCall, SignerInfo, TransactionReceipt
from routerforge.models.contracts import DeployedContract, ExecutorRegistryEntry
from routerforge.models.network import (
    DEFAULT_NETWORK_DEFINITIONS,
    ExecutorSpec,
    NetworkConfig,
)
from routerforge.models.registry import (
    ReconcileProposal,
    ReconcileResult,
    ReconcileStatus,
)
from routerforge.models.reports import DeploymentRunReport
from routerforge.models.roles import (
    ROLE_IDS,
    RoleGrantDeclaration,
    RoleGrantResult,
    RoleGrantStatus,
    RoleProvisionReport,
    RouterRole,
)
from routerforge.models.verification import (
    VALID_PHASE_TRANSITIONS,
    ContractVerificationRecord,
    VerificationOutcome,
    VerificationPhase,
    VerificationReport,
    VerificationResult,
    VerificationService,
    VerificationStatus,
)

__all__ = [
    # chain
    "ContractCall",
    "SignerInfo",
    "TransactionReceipt",
    # contracts
    "DeployedContract",
    "ExecutorRegistryEntry",
    # network
    "DEFAULT_NETWORK_DEFINITIONS",
    "ExecutorSpec",
    "NetworkConfig",
    # registry
    "ReconcileProposal",
    "ReconcileResult",
    "ReconcileStatus",
    # reports
    "DeploymentRunReport",
    # roles
    "ROLE_IDS",
    "RoleGrantDeclaration",
    "RoleGrantResult",
    "RoleGrantStatus",
    "RoleProvisionReport",
    "RouterRole",
    # verification
    "VALID_PHASE_TRANSITIONS",
    "ContractVerificationRecord",
    "VerificationOutcome",
    "VerificationPhase",
    "VerificationReport",
    "VerificationResult",
    "VerificationService",
    "VerificationStatus",
]
