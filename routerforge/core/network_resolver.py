"""Network identifier -> immutable deployment parameters.

The table is built once at process start and injected into the components
that need it.  Lookups are pure: no I/O, no defaults for unknown networks.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import ValidationError

from routerforge.core.errors import FatalConfigError, UnsupportedNetwork
from routerforge.models.network import DEFAULT_NETWORK_DEFINITIONS, NetworkConfig


class NetworkResolver:
    """Immutable lookup of per-network deployment parameters.

    Parameters
    ----------
    definitions:
        The network definitions.  Defaults to ``DEFAULT_NETWORK_DEFINITIONS``.
    """

    def __init__(self, definitions: Iterable[NetworkConfig] | None = None) -> None:
        table: dict[str, NetworkConfig] = {}
        for definition in (
            DEFAULT_NETWORK_DEFINITIONS if definitions is None else definitions
        ):
            if definition.network_id in table:
                raise FatalConfigError(
                    f"Duplicate network definition: {definition.network_id!r}"
                )
            table[definition.network_id] = definition
        self._table: Mapping[str, NetworkConfig] = MappingProxyType(table)

    @classmethod
    def from_file(cls, path: Path) -> NetworkResolver:
        """Build a resolver from a JSON list of network definitions."""
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise FatalConfigError(f"Cannot read networks file {path}: {exc}") from exc

        if not isinstance(raw, list):
            raise FatalConfigError(
                f"Networks file {path} must contain a list of network definitions"
            )
        try:
            definitions = [NetworkConfig.model_validate(item) for item in raw]
        except ValidationError as exc:
            raise FatalConfigError(f"Invalid networks file {path}: {exc}") from exc
        return cls(definitions)

    def resolve(self, network_id: str) -> NetworkConfig:
        """Return the parameters for *network_id* or raise ``UnsupportedNetwork``."""
        try:
            return self._table[network_id]
        except KeyError:
            raise UnsupportedNetwork(network_id, self.supported_networks) from None

    @property
    def supported_networks(self) -> list[str]:
        return sorted(self._table)

    def __contains__(self, network_id: object) -> bool:
        return network_id in self._table
