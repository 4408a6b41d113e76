"""Contract factory / ABI provider backed by compiler build outputs.

Supports two layouts:

* Hardhat: ``artifacts/contracts/<File>.sol/<Name>.json`` with a sibling
  ``<Name>.dbg.json`` pointing at the ``build-info`` file that holds the
  standard-JSON compiler input.
* Foundry: ``out/<File>.sol/<Name>.json`` with ``bytecode.object`` and the
  solc ``metadata`` block.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from eth_abi import encode
from pydantic import BaseModel, ConfigDict

from routerforge.core.errors import FatalConfigError

logger = logging.getLogger(__name__)


class ArtifactError(FatalConfigError):
    """Raised when a contract artifact is missing, ambiguous, or malformed."""


class ContractArtifact(BaseModel):
    """Compiled contract: interface, creation code, and source metadata."""

    model_config = ConfigDict(frozen=True)

    name: str
    source_name: str = ""  # e.g. "src/TychoRouter.sol"
    abi: list[dict[str, Any]]
    bytecode: str
    compiler_version: str = ""  # long form, e.g. "0.8.26+commit.8a97fa7a"
    compiler_input: dict[str, Any] | None = None  # standard-JSON input

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.name}" if self.source_name else self.name

    def constructor_types(self) -> list[str]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return [_canonical_type(param) for param in item.get("inputs", [])]
        return []

    def encode_constructor_args(self, args: tuple[Any, ...] | list[Any]) -> str:
        """ABI-encode constructor arguments as unprefixed hex."""
        types = self.constructor_types()
        if len(types) != len(args):
            raise ArtifactError(
                f"{self.name} constructor takes {len(types)} argument(s), got {len(args)}"
            )
        if not types:
            return ""
        return encode(types, list(args)).hex()


def _canonical_type(param: dict[str, Any]) -> str:
    """Render an ABI parameter type, expanding tuples."""
    abi_type: str = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(_canonical_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


class ArtifactProvider:
    """Resolves a logical contract name to its compiled artifact.

    Parameters
    ----------
    root:
        The Hardhat ``artifacts`` directory or Foundry ``out`` directory.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)
        self._cache: dict[str, ContractArtifact] = {}

    def get(self, name: str) -> ContractArtifact:
        if name not in self._cache:
            self._cache[name] = self._load(name)
        return self._cache[name]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _find(self, name: str) -> Path:
        if not self._root.is_dir():
            raise ArtifactError(f"Artifacts directory not found: {self._root}")
        candidates = [
            p
            for p in self._root.rglob(f"{name}.json")
            if "build-info" not in p.parts
        ]
        if not candidates:
            raise ArtifactError(f"No artifact for contract {name!r} under {self._root}")
        if len(candidates) > 1:
            raise ArtifactError(
                f"Ambiguous artifact for {name!r}: "
                + ", ".join(str(p) for p in sorted(candidates))
            )
        return candidates[0]

    def _load(self, name: str) -> ContractArtifact:
        path = self._find(name)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ArtifactError(f"Cannot read artifact {path}: {exc}") from exc

        bytecode = data.get("bytecode")
        if isinstance(bytecode, dict):  # Foundry
            return self._from_foundry(name, data)
        if not isinstance(bytecode, str) or "abi" not in data:
            raise ArtifactError(f"Artifact {path} has no abi/bytecode")
        return self._from_hardhat(name, path, data)

    def _from_hardhat(
        self, name: str, path: Path, data: dict[str, Any]
    ) -> ContractArtifact:
        compiler_version = ""
        compiler_input = None
        dbg_path = path.with_name(f"{name}.dbg.json")
        if dbg_path.exists():
            dbg = json.loads(dbg_path.read_text(encoding="utf-8"))
            build_info_path = (dbg_path.parent / dbg["buildInfo"]).resolve()
            build_info = json.loads(build_info_path.read_text(encoding="utf-8"))
            compiler_version = build_info.get("solcLongVersion", build_info.get("solcVersion", ""))
            compiler_input = build_info.get("input")
        else:
            logger.debug("No debug file for %s; source verification data unavailable", name)

        return ContractArtifact(
            name=data.get("contractName", name),
            source_name=data.get("sourceName", ""),
            abi=data["abi"],
            bytecode=data["bytecode"],
            compiler_version=compiler_version,
            compiler_input=compiler_input,
        )

    def _from_foundry(self, name: str, data: dict[str, Any]) -> ContractArtifact:
        metadata = data.get("metadata") or {}
        if isinstance(metadata, str):
            metadata = json.loads(metadata)
        target = metadata.get("settings", {}).get("compilationTarget", {})
        source_name = next(iter(target), "")
        return ContractArtifact(
            name=name,
            source_name=source_name,
            abi=data["abi"],
            bytecode=data["bytecode"]["object"],
            compiler_version=metadata.get("compiler", {}).get("version", ""),
        )
