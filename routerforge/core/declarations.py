"""Declaration files: desired executor registrations and role grants.

Both files are plain JSON, loaded in full at run start.  Accepted shapes:

Executors (keyed by network)::

    {"base": {"UniswapV2Executor": "0x...", ...}}
    {"base": [{"name": "UniswapV2Executor", "address": "0x..."}, ...]}

Roles (role-first or network-first)::

    {"PAUSER_ROLE": {"base": ["0x...", "0x..."]}}
    {"base": {"PAUSER_ROLE": ["0x...", "0x..."]}}

A roles file is read as role-first when any top-level key is a known role
name; other top-level keys are then unknown roles.  A file that also nests
known roles under a non-role key mixes both shapes and is rejected.
Addresses are validated and normalised to checksum form.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from web3 import Web3

from routerforge.core.errors import DeclarationError
from routerforge.models.contracts import DeployedContract, ExecutorRegistryEntry
from routerforge.models.roles import KNOWN_ROLE_NAMES, RoleGrantDeclaration

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DeclarationError(f"Declaration file not found: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise DeclarationError(f"Cannot read declaration file {path}: {exc}") from exc


def normalize_address(value: Any, *, where: str) -> str:
    """Return *value* as a checksum address or raise ``DeclarationError``."""
    if not isinstance(value, str) or not Web3.is_address(value):
        raise DeclarationError(f"Invalid address {value!r} in {where}")
    return Web3.to_checksum_address(value)


def _unique(addresses: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for address in addresses:
        if address.lower() not in seen:
            seen.add(address.lower())
            ordered.append(address)
    return ordered


# ---------------------------------------------------------------------------
# Executors
# ---------------------------------------------------------------------------


def load_executor_declarations(path: Path, network: str) -> list[ExecutorRegistryEntry]:
    """Declared executors for *network*, in file order.  Empty when absent."""
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise DeclarationError(f"{path}: expected an object keyed by network")

    section = raw.get(network)
    if section is None:
        logger.warning("No executors declared for %s in %s", network, path)
        return []

    where = f"{path} [{network}]"
    if isinstance(section, dict):
        pairs = list(section.items())
    elif isinstance(section, list):
        pairs = []
        for item in section:
            if not isinstance(item, dict) or "name" not in item or "address" not in item:
                raise DeclarationError(f"{where}: entries need 'name' and 'address'")
            pairs.append((item["name"], item["address"]))
    else:
        raise DeclarationError(f"{where}: expected an object or a list")

    return [
        ExecutorRegistryEntry(name=str(name), address=normalize_address(address, where=where))
        for name, address in pairs
    ]


def record_deployed_executors(
    path: Path, network: str, deployed: Iterable[DeployedContract]
) -> Path:
    """Append freshly deployed executors to the declaration file for *network*.

    Existing entries are kept; a network stored in the mapping shape is
    rewritten in the list shape so duplicate names survive.
    """
    path = Path(path)
    raw: dict[str, Any] = _read_json(path) if path.exists() else {}
    if not isinstance(raw, dict):
        raise DeclarationError(f"{path}: expected an object keyed by network")

    section = raw.get(network, [])
    if isinstance(section, dict):
        section = [{"name": n, "address": a} for n, a in section.items()]
    entries = list(section)
    for contract in deployed:
        entries.append({"name": contract.logical_name, "address": contract.address})
    raw[network] = entries

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(raw, indent=4) + "\n", encoding="utf-8")
    tmp.replace(path)
    logger.info("Recorded %d executor(s) for %s in %s", len(entries), network, path)
    return path


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


def load_role_declarations(path: Path) -> RoleGrantDeclaration:
    """Load a roles file into role -> network -> ordered unique addresses."""
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise DeclarationError(f"{path}: expected an object")

    role_first = any(key in KNOWN_ROLE_NAMES for key in raw)
    if role_first:
        for key, inner in raw.items():
            if (
                key not in KNOWN_ROLE_NAMES
                and isinstance(inner, dict)
                and any(k in KNOWN_ROLE_NAMES for k in inner)
            ):
                raise DeclarationError(
                    f"{path}: mixes role-first and network-first entries at {key!r}"
                )
    grants: dict[str, dict[str, list[str]]] = {}

    for outer, inner in raw.items():
        if not isinstance(inner, dict):
            raise DeclarationError(f"{path} [{outer}]: expected an object")
        for key, addresses in inner.items():
            role, network = (outer, key) if role_first else (key, outer)
            where = f"{path} [{role}/{network}]"
            if addresses is None:
                addresses = []
            if not isinstance(addresses, list):
                raise DeclarationError(f"{where}: expected a list of addresses")
            normalized = [normalize_address(a, where=where) for a in addresses]
            existing = grants.setdefault(role, {}).get(network, [])
            grants[role][network] = _unique(existing + normalized)

    return RoleGrantDeclaration(grants=grants)
