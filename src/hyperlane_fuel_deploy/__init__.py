"""
hyperlane-fuel-deploy: deploy the Hyperlane mailbox and test recipient to a Fuel node
"""

from importlib.metadata import PackageNotFoundError, version

from .client import ChainClient, FuelClient
from .config import DeployConfig
from .contract_id import code_root, compute_contract_id, storage_root
from .deployer import deploy_or_get_contract, dispatch_message, latest_checkpoint, run
from .exceptions import (
    ArtifactNotFoundError,
    ContractIdMismatchError,
    DeployError,
    InvalidHexError,
    RpcError,
    ToolchainError,
    TransactionFailedError,
)
from .types import CallResult, Contract, DeploymentTarget, DeployReport, DispatchMessage, StorageSlot
from .wallet import Wallet

try:
    __version__ = version("hyperlane-fuel-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "ChainClient",
    "FuelClient",
    "DeployConfig",
    "Wallet",
    "code_root",
    "storage_root",
    "compute_contract_id",
    "deploy_or_get_contract",
    "dispatch_message",
    "latest_checkpoint",
    "run",
    "CallResult",
    "Contract",
    "DeploymentTarget",
    "DeployReport",
    "DispatchMessage",
    "StorageSlot",
    "DeployError",
    "ArtifactNotFoundError",
    "InvalidHexError",
    "RpcError",
    "ToolchainError",
    "TransactionFailedError",
    "ContractIdMismatchError",
]
