"""
ABI Loader - Loads contract ABIs from Foundry-style artifacts.

Artifacts are JSON files of the form {"abi": [...]} named
<ContractName>.json. The bundled epigraph/contracts/ directory is the
default source; a deployment can point at its own build output instead.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from eth_hash.auto import keccak

CONTRACTS_DIR = Path(__file__).resolve().parent.parent / "contracts"


def keccak256(data: bytes) -> bytes:
    """Keccak-256 hash (NOT the same as hashlib.sha3_256 / NIST SHA-3)."""
    return keccak(data)


@lru_cache(maxsize=16)
def _load_artifact_abi(abi_path: Path) -> tuple[dict[str, Any], ...]:
    with abi_path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    abi = artifact["abi"] if isinstance(artifact, dict) else artifact
    if not isinstance(abi, list):
        raise ValueError(f"Artifact {abi_path} does not contain an ABI list")
    return tuple(abi)


def load_abi(contract_name: str, search_dir: Optional[Path] = None) -> list[dict[str, Any]]:
    """
    Load ABI for a contract.

    Args:
        contract_name: Contract name (e.g., "MessageStore")
        search_dir: Directory holding <contract_name>.json (default: bundled)

    Returns:
        ABI as a list of dicts

    Raises:
        FileNotFoundError: If ABI file not found
    """
    root = Path(search_dir) if search_dir is not None else CONTRACTS_DIR
    abi_path = (root / f"{contract_name}.json").resolve()

    if not abi_path.exists():
        raise FileNotFoundError(f"ABI not found: {abi_path}")

    return list(_load_artifact_abi(abi_path))


def find_function(abi: list[dict[str, Any]], function_name: str) -> dict[str, Any]:
    """Return the ABI entry for a function, or raise ValueError."""
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def input_types(func: dict[str, Any]) -> list[str]:
    return [inp["type"] for inp in func.get("inputs", [])]


def function_signature(func: dict[str, Any]) -> str:
    return f"{func['name']}({','.join(input_types(func))})"


def function_selector(func: dict[str, Any]) -> bytes:
    return keccak256(function_signature(func).encode("utf-8"))[:4]

