"""Path management utilities for hyperlane-fuel-deploy."""

from pathlib import Path
from typing import Optional, Union

from .constants import DEFAULT_BUILD_PROFILE, DEFAULT_CONTRACTS_DIR


def get_default_contracts_dir() -> Path:
    """
    Get default contracts directory.

    Returns:
        Path to ../contracts, relative to the working directory
    """
    return (Path.cwd() / DEFAULT_CONTRACTS_DIR).resolve()


def get_artifact_paths(
    project_dir: Union[Path, str],
    artifact: str,
    build_profile: Optional[str] = None,
) -> tuple[Path, Path, Path]:
    """
    Get paths of the artifacts forc builds for a contract project.

    Args:
        project_dir: forc project directory
        artifact: forc package name
        build_profile: forc build profile (defaults to "debug")

    Returns:
        Tuple of (bytecode_path, abi_path, storage_slots_path)
    """
    if build_profile is None:
        build_profile = DEFAULT_BUILD_PROFILE

    out_dir = Path(project_dir).absolute() / "out" / build_profile

    bytecode_path = out_dir / f"{artifact}.bin"
    abi_path = out_dir / f"{artifact}-abi.json"
    storage_slots_path = out_dir / f"{artifact}-storage_slots.json"

    return (bytecode_path, abi_path, storage_slots_path)
