"""Compiled contract artifact loaders for hyperlane-fuel-deploy."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .contract_id import parse_hex
from .exceptions import ArtifactNotFoundError
from .paths import get_artifact_paths
from .types import DeploymentTarget, StorageSlot


def load_bytecode(file_path: Path) -> bytes:
    """
    Read a compiled contract binary.

    Raises:
        ArtifactNotFoundError: If the binary does not exist
    """
    try:
        with open(file_path, "rb") as f:
            return f.read()
    except FileNotFoundError as e:
        raise ArtifactNotFoundError(
            f"Contract bytecode not found at {file_path}. Run `forc build` first."
        ) from e


def load_abi(file_path: Path) -> Dict[str, Any]:
    """
    Read a contract's JSON ABI.

    Raises:
        ArtifactNotFoundError: If the ABI file does not exist
    """
    try:
        with open(file_path) as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ArtifactNotFoundError(f"Contract ABI not found at {file_path}") from e


def load_storage_slots(file_path: Path) -> List[StorageSlot]:
    """
    Read initial storage slots emitted by forc.

    The file is a JSON list of {"key": <hex>, "value": <hex>} objects.
    A missing file means the contract has no initial storage.

    Args:
        file_path: Path to <name>-storage_slots.json

    Returns:
        List of storage slots, in file order
    """
    if not file_path.exists():
        return []

    with open(file_path) as f:
        data = json.load(f)

    return [
        StorageSlot(key=parse_hex(slot["key"], 32), value=parse_hex(slot["value"], 32))
        for slot in data
    ]


def load_deployment_target(
    name: str,
    project_dir: Union[Path, str],
    artifact: str,
    salt: bytes,
    build_profile: Optional[str] = None,
) -> DeploymentTarget:
    """
    Load everything needed to deploy one contract.

    Args:
        name: Role of the contract (e.g., "mailbox")
        project_dir: forc project directory
        artifact: forc package name
        salt: 32-byte deployment salt
        build_profile: forc build profile (defaults to "debug")

    Returns:
        DeploymentTarget

    Raises:
        ArtifactNotFoundError: If bytecode or ABI is missing
    """
    bytecode_path, abi_path, storage_slots_path = get_artifact_paths(
        project_dir, artifact, build_profile
    )

    return DeploymentTarget(
        name=name,
        project_dir=Path(project_dir).absolute(),
        bytecode=load_bytecode(bytecode_path),
        abi=load_abi(abi_path),
        abi_path=abi_path,
        salt=salt,
        storage_slots=tuple(load_storage_slots(storage_slots_path)),
    )
