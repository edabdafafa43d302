"""Data types and dataclasses for hyperlane-fuel-deploy."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .constants import TEST_DESTINATION_DOMAIN, TEST_MESSAGE_BODY, TEST_RECIPIENT

if TYPE_CHECKING:
    from .wallet import Wallet


@dataclass(frozen=True)
class StorageSlot:
    """Initial value of one contract storage slot."""

    key: bytes  # 32 bytes
    value: bytes  # 32 bytes


@dataclass(frozen=True)
class DeploymentTarget:
    """A compiled contract ready to be deployed."""

    name: str  # e.g., "mailbox"
    project_dir: Path  # forc project the artifacts were built from
    bytecode: bytes
    abi: Dict[str, Any]
    abi_path: Path
    salt: bytes  # 32 bytes
    storage_slots: tuple[StorageSlot, ...] = ()


@dataclass
class Contract:
    """Handle used to invoke functions on a deployed contract."""

    contract_id: str  # 0x-prefixed hex
    abi: Dict[str, Any]
    abi_path: Path
    wallet: "Wallet"
    name: Optional[str] = None


@dataclass(frozen=True)
class DispatchMessage:
    """Arguments of a mailbox `dispatch` call."""

    destination_domain: int = TEST_DESTINATION_DOMAIN
    recipient: str = TEST_RECIPIENT  # 32-byte hex
    body: tuple[int, ...] = tuple(TEST_MESSAGE_BODY)


@dataclass
class CallResult:
    """Outcome of a contract call, either submitted or simulated."""

    function: str
    status: str  # "success" or "failure"
    value: Optional[str] = None
    transaction_id: Optional[str] = None
    receipts: List[Dict[str, Any]] = field(default_factory=list)
    raw_output: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


@dataclass
class DeployReport:
    """Summary of one run of the deploy flow."""

    mailbox: Contract
    test_recipient: Contract
    dispatch: Optional[CallResult] = None
    checkpoint: Optional[str] = None
