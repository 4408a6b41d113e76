"""Run configuration: env-driven via pydantic-settings.

Reads from the process environment and a ``.env`` file in the working
directory.  Variable names match the deployment scripts' conventions
(``RPC_URL``, ``PRIVATE_KEY``, ``ROUTER_ADDRESS``, ...), so no prefix is
applied.

Examples
--------
Override via environment::

    export NETWORK=base
    export RPC_URL=https://mainnet.base.org
    export ROUTER_ADDRESS=0x...

Or via .env file::

    NETWORK=tenderly_ethereum
    SETTLING_DELAY_SECONDS=90
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from routerforge.core.errors import MissingConfigError


class DeployConfig(BaseSettings):
    """Settings for a single operator run."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Network selection and signing
    network: str = ""
    rpc_url: str = ""
    private_key: str = ""
    router_address: str = ""
    router_contract: str = "TychoRouter"  # artifact name of the router
    deploy_wallet: str = ""  # wallet topped up by fund-wallet on simulation forks

    # Simulator verification (Tenderly)
    tenderly_account: str = ""
    tenderly_project: str = ""
    tenderly_access_key: str = ""
    tenderly_api_url: str = "https://api.tenderly.co/api/v1"

    # Explorer verification (Etherscan v2, multichain)
    etherscan_api_key: str = ""
    etherscan_api_url: str = "https://api.etherscan.io/v2/api"

    # Build outputs and declaration files
    artifacts_path: Path = Path("artifacts")
    executors_file: Path = Path("config/executor_addresses.json")
    roles_file: Path = Path("config/roles.json")
    networks_file: Path | None = None

    # Timing
    settling_delay_seconds: float = 60.0
    receipt_timeout_seconds: float = 600.0
    http_timeout_seconds: float = 30.0

    # Executor registration
    gas_per_executor: int = 50_000
    query_concurrency: int = 8

    log_level: str = "INFO"

    @property
    def simulator_configured(self) -> bool:
        return bool(
            self.tenderly_account and self.tenderly_project and self.tenderly_access_key
        )

    @property
    def explorer_configured(self) -> bool:
        return bool(self.etherscan_api_key)

    def require(self, *fields: str) -> None:
        """Raise ``MissingConfigError`` naming every empty field at once."""
        missing = [name.upper() for name in fields if not getattr(self, name, None)]
        if missing:
            raise MissingConfigError(missing)
