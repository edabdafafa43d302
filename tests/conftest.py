"""Shared pytest fixtures for hyperlane-fuel-deploy tests."""

import hashlib
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pytest

from hyperlane_fuel_deploy.client import ChainClient
from hyperlane_fuel_deploy.config import DeployConfig
from hyperlane_fuel_deploy.constants import CONTRACT_CONFIG, DEFAULT_PRIVATE_KEY
from hyperlane_fuel_deploy.contract_id import contract_id_hex
from hyperlane_fuel_deploy.exceptions import ToolchainError
from hyperlane_fuel_deploy.types import CallResult, Contract, DeploymentTarget
from hyperlane_fuel_deploy.wallet import Wallet

MAILBOX_BYTECODE = bytes(range(256)) * 4
RECIPIENT_BYTECODE = bytes(reversed(range(256))) * 2 + b"\x00\x01\x02\x03"

MAILBOX_STORAGE_SLOTS = [
    {"key": "02dac99c283f16bc91b74f6942db7f012699a2ad51272b15207b9cc14a70dbae", "value": "00" * 32},
    {"key": "0x" + "ab" * 32, "value": "0x" + "00" * 31 + "01"},
]


class FakeChain(ChainClient):
    """
    In-memory chain that records every deployment and transaction.

    Contracts land at their deterministic ID. Dispatching a message through
    the test recipient only works when the mailbox is declared as a callee.
    The mailbox's checkpoint read reverts until a message has been dispatched.
    """

    def __init__(self):
        self.contracts: Dict[str, Dict[str, Any]] = {}
        self.deployments: List[str] = []
        self.submitted: List[Dict[str, Any]] = []
        self.simulated: List[str] = []
        self.messages: List[Sequence[Any]] = []
        self.connected = False
        self.deploy_id_override: Optional[str] = None
        self.fail_dispatch = False

    def connect(self) -> Dict[str, Any]:
        self.connected = True
        return {"name": "local_testnet", "latestBlock": {"height": "0"}}

    def get_contract(self, contract_id: str) -> Optional[Dict[str, Any]]:
        return self.contracts.get(contract_id)

    def deploy(self, target: DeploymentTarget, wallet: Wallet) -> Contract:
        contract_id = self.deploy_id_override or contract_id_hex(
            target.bytecode, target.salt, target.storage_slots
        )
        self.deployments.append(target.name)
        self.contracts[contract_id] = {"id": contract_id, "name": target.name}
        return Contract(
            contract_id=contract_id,
            abi=target.abi,
            abi_path=target.abi_path,
            wallet=wallet,
            name=target.name,
        )

    def submit(
        self,
        contract: Contract,
        function: str,
        args: Sequence[Any],
        callees: Iterable[Contract] = (),
    ) -> CallResult:
        callee_ids = [callee.contract_id for callee in callees]
        self.submitted.append(
            {"contract": contract.contract_id, "function": function, "args": list(args), "callees": callee_ids}
        )
        transaction_id = "0x" + hashlib.sha256(repr(self.submitted).encode()).hexdigest()

        forwards_to_mailbox = contract.name == "test_recipient"
        if self.fail_dispatch or (forwards_to_mailbox and args[1] not in callee_ids):
            return CallResult(function=function, status="failure", transaction_id=transaction_id)

        self.messages.append(list(args))
        receipts = [{"receiptType": "CALL", "id": callee, "data": None} for callee in callee_ids]
        receipts.append({"receiptType": "RETURN", "id": contract.contract_id, "data": None})
        return CallResult(
            function=function, status="success", transaction_id=transaction_id, receipts=receipts
        )

    def simulate(self, contract: Contract, function: str, args: Sequence[Any] = ()) -> CallResult:
        self.simulated.append(function)
        if not self.messages:
            raise ToolchainError("`forc call` failed with exit code 1: Revert(0)")
        checkpoint = hashlib.sha256(repr(self.messages).encode()).hexdigest()
        return CallResult(function=function, status="success", value=f"(0x{checkpoint}, {len(self.messages) - 1})")


def write_contract_project(
    project_dir: Path,
    artifact: str,
    bytecode: bytes,
    storage_slots: Optional[List[Dict[str, str]]] = None,
    build_profile: str = "debug",
) -> Path:
    """Lay out forc build artifacts for one contract project."""
    out_dir = project_dir / "out" / build_profile
    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / f"{artifact}.bin").write_bytes(bytecode)
    (out_dir / f"{artifact}-abi.json").write_text(
        json.dumps({"functions": [{"name": "dispatch"}, {"name": "latest_checkpoint"}]})
    )
    if storage_slots is not None:
        (out_dir / f"{artifact}-storage_slots.json").write_text(json.dumps(storage_slots))
    return project_dir


@pytest.fixture
def contracts_dir(tmp_path: Path) -> Path:
    """Create a contracts directory holding built mailbox and test recipient projects."""
    root = tmp_path / "contracts"
    mailbox = CONTRACT_CONFIG["mailbox"]
    recipient = CONTRACT_CONFIG["test_recipient"]
    write_contract_project(
        root / mailbox["project_dir"], mailbox["artifact"], MAILBOX_BYTECODE, MAILBOX_STORAGE_SLOTS
    )
    write_contract_project(
        root / recipient["project_dir"], recipient["artifact"], RECIPIENT_BYTECODE, []
    )
    return root


@pytest.fixture
def deploy_config(contracts_dir: Path) -> DeployConfig:
    """Default run configuration pointed at the temporary contracts directory."""
    return DeployConfig(contracts_dir=contracts_dir)


@pytest.fixture
def fake_chain() -> FakeChain:
    """Fresh in-memory chain."""
    return FakeChain()


@pytest.fixture
def wallet() -> Wallet:
    """Wallet for the default local node account."""
    return Wallet.from_private_key(DEFAULT_PRIVATE_KEY)
