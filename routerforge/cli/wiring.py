"""Builds the core's collaborators from ``DeployConfig``.

Commands reach these through the module (``wiring.build_client(...)``) so
tests can substitute fakes with ``monkeypatch``.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError
from rich.logging import RichHandler

from routerforge.chain.artifacts import ArtifactProvider
from routerforge.chain.client import ChainClient, Web3ChainClient
from routerforge.config import DeployConfig
from routerforge.core.errors import FatalConfigError, MissingConfigError
from routerforge.core.network_resolver import NetworkResolver
from routerforge.core.verification import VerificationPipeline
from routerforge.models.network import NetworkConfig
from routerforge.verify.etherscan import EtherscanVerifier
from routerforge.verify.tenderly import TenderlyVerifier


def load_config() -> DeployConfig:
    """Read settings, reporting malformed values as a configuration error."""
    try:
        return DeployConfig()
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise FatalConfigError(f"Invalid configuration: {problems}") from exc


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def resolve_network_id(config: DeployConfig, network: str | None) -> str:
    network_id = network or config.network
    if not network_id:
        raise MissingConfigError(["NETWORK"])
    return network_id


def build_resolver(config: DeployConfig) -> NetworkResolver:
    if config.networks_file is not None:
        return NetworkResolver.from_file(config.networks_file)
    return NetworkResolver()


def build_artifacts(config: DeployConfig) -> ArtifactProvider:
    return ArtifactProvider(config.artifacts_path)


def build_client(config: DeployConfig, artifacts: ArtifactProvider) -> ChainClient:
    config.require("rpc_url", "private_key")
    return Web3ChainClient(
        config.rpc_url,
        config.private_key,
        artifacts,
        receipt_timeout=config.receipt_timeout_seconds,
        request_timeout=config.http_timeout_seconds,
    )


def build_rpc_client(config: DeployConfig) -> Web3ChainClient:
    """Client without a signing key, for raw RPC calls on simulation forks."""
    config.require("rpc_url")
    return Web3ChainClient(
        config.rpc_url,
        None,
        build_artifacts(config),
        request_timeout=config.http_timeout_seconds,
    )


def build_verification(
    config: DeployConfig, network: NetworkConfig, artifacts: ArtifactProvider
) -> VerificationPipeline:
    simulator = None
    if config.simulator_configured:
        simulator = TenderlyVerifier(
            account=config.tenderly_account,
            project=config.tenderly_project,
            access_key=config.tenderly_access_key,
            chain_id=network.chain_id,
            artifacts=artifacts,
            api_url=config.tenderly_api_url,
            timeout=config.http_timeout_seconds,
        )

    explorer = None
    # Simulation forks are invisible to the public explorer.
    if config.explorer_configured and not network.is_simulation:
        explorer = EtherscanVerifier(
            api_key=config.etherscan_api_key,
            chain_id=network.explorer_chain,
            artifacts=artifacts,
            api_url=config.etherscan_api_url,
            timeout=config.http_timeout_seconds,
        )

    return VerificationPipeline(
        simulator, explorer, settling_delay=config.settling_delay_seconds
    )
