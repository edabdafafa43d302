"""Chain client for hyperlane-fuel-deploy."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Sequence

import requests

from .constants import BASE_ASSET_ID, DEFAULT_TIMEOUT
from .contract_id import compute_contract_id
from .exceptions import RpcError, ToolchainError
from .toolchain import CALL_MODE_LIVE, CALL_MODE_SIMULATE, Forc, parse_call_output, parse_deploy_output
from .types import CallResult, Contract, DeploymentTarget
from .wallet import Wallet

logger = logging.getLogger(__name__)

CHAIN_QUERY = """
query {
  chain {
    name
    latestBlock {
      height
    }
  }
}
"""

CONTRACT_QUERY = """
query Contract($id: ContractId!) {
  contract(id: $id) {
    id
  }
}
"""

BALANCE_QUERY = """
query Balance($owner: Address!, $assetId: AssetId!) {
  balance(owner: $owner, assetId: $assetId) {
    amount
  }
}
"""

TRANSACTION_STATUS_QUERY = """
query TransactionStatus($id: TransactionId!) {
  transaction(id: $id) {
    status {
      __typename
      ... on SuccessStatus {
        receipts {
          receiptType
          id
          data
        }
      }
      ... on FailureStatus {
        reason
        receipts {
          receiptType
          id
          data
        }
      }
    }
  }
}
"""

SUCCESS_STATUS = "SuccessStatus"


class ChainClient(ABC):
    """Operations the deployer needs from a chain."""

    @abstractmethod
    def connect(self) -> Dict[str, Any]:
        """Check the node is reachable and return its chain info."""

    @abstractmethod
    def get_contract(self, contract_id: str) -> Optional[Dict[str, Any]]:
        """Return the contract at contract_id, or None if nothing is deployed there."""

    @abstractmethod
    def deploy(self, target: DeploymentTarget, wallet: Wallet) -> Contract:
        """Deploy target, wait for inclusion and return a handle to it."""

    @abstractmethod
    def submit(
        self,
        contract: Contract,
        function: str,
        args: Sequence[Any],
        callees: Iterable[Contract] = (),
    ) -> CallResult:
        """Submit a state-changing call and wait for its final status."""

    @abstractmethod
    def simulate(
        self, contract: Contract, function: str, args: Sequence[Any] = ()
    ) -> CallResult:
        """Run a read-only call without submitting a transaction."""

    def compute_contract_id(self, bytecode: bytes, salt: bytes, state_root: bytes) -> bytes:
        """
        Contract ID a deployment of bytecode with salt and storage state_root
        will get. This needs no node, so the default is the local derivation.

        Raises:
            InvalidHexError: If salt or state_root is not 32 bytes
        """
        return compute_contract_id(bytecode, salt, state_root)

    def balance(self, owner: str) -> Optional[int]:
        """Base asset balance of owner, or None if the chain can't report one."""
        return None


class FuelClient(ChainClient):
    """
    Client for a fuel-core node.

    Chain state is read over the node's GraphQL API. Transactions are built,
    signed and submitted by the forc toolchain.
    """

    def __init__(
        self,
        node_url: str,
        forc: Optional[Forc] = None,
        timeout: int = DEFAULT_TIMEOUT,
        build_profile: Optional[str] = None,
    ):
        self.node_url = node_url
        self.forc = forc if forc is not None else Forc(node_url)
        self.timeout = timeout
        self.build_profile = build_profile

    def _query(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Run a GraphQL query against the node.

        Returns:
            The "data" object of the response

        Raises:
            RpcError: On network errors, non-200 responses or GraphQL errors
        """
        try:
            response = requests.post(
                self.node_url,
                json={"query": query, "variables": variables or {}},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RpcError(f"Network error during GraphQL request: {e}") from e

        # Check for HTTP errors
        if response.status_code != 200:
            raise RpcError(f"GraphQL request failed with status {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise RpcError("GraphQL response is not valid JSON") from e

        # Check for GraphQL errors
        if result.get("errors"):
            messages = "; ".join(err.get("message", str(err)) for err in result["errors"])
            raise RpcError(f"GraphQL error: {messages}")

        return result.get("data") or {}

    def connect(self) -> Dict[str, Any]:
        chain = self._query(CHAIN_QUERY).get("chain")
        if chain is None:
            raise RpcError(f"Node at {self.node_url} returned no chain info")
        logger.debug("Connected to %s at %s", chain.get("name"), self.node_url)
        return chain

    def get_contract(self, contract_id: str) -> Optional[Dict[str, Any]]:
        return self._query(CONTRACT_QUERY, {"id": contract_id}).get("contract")

    def balance(self, owner: str, asset_id: str = BASE_ASSET_ID) -> int:
        """Balance of asset_id held by owner."""
        balance = self._query(BALANCE_QUERY, {"owner": owner, "assetId": asset_id}).get(
            "balance"
        )
        if balance is None:
            return 0
        return int(balance["amount"])

    def transaction_outcome(self, transaction_id: str) -> Optional[Dict[str, Any]]:
        """
        Status of a transaction as the node reports it: `__typename`, plus
        `receipts` (and `reason` on failure) once the transaction has executed.
        None if the node doesn't know the transaction.
        """
        transaction = self._query(TRANSACTION_STATUS_QUERY, {"id": transaction_id}).get(
            "transaction"
        )
        if transaction is None:
            return None
        return transaction.get("status")

    def transaction_status(self, transaction_id: str) -> Optional[str]:
        """GraphQL status type of a transaction (e.g. "SuccessStatus"), or None if unknown."""
        outcome = self.transaction_outcome(transaction_id)
        if outcome is None:
            return None
        return outcome["__typename"]

    def deploy(self, target: DeploymentTarget, wallet: Wallet) -> Contract:
        output = self.forc.deploy(
            target.project_dir,
            salt="0x" + target.salt.hex(),
            signing_key=wallet.private_key_hex,
            build_profile=self.build_profile,
        )

        contract_id = parse_deploy_output(output)
        if contract_id is None:
            raise ToolchainError(f"No contract ID in `forc deploy` output for {target.name}")

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
        output = self.forc.call(
            contract.contract_id,
            contract.abi_path,
            function,
            args,
            signing_key=contract.wallet.private_key_hex,
            mode=CALL_MODE_LIVE,
            contracts=[callee.contract_id for callee in callees],
        )
        value, transaction_id = parse_call_output(output)
        if transaction_id is None:
            raise ToolchainError(f"No transaction ID in `forc call` output for {function}")

        # Anything short of SuccessStatus is a failure
        outcome = self.transaction_outcome(transaction_id) or {}
        status = "success" if outcome.get("__typename") == SUCCESS_STATUS else "failure"
        if status == "failure":
            logger.debug(
                "Transaction %s has status %s: %s",
                transaction_id,
                outcome.get("__typename"),
                outcome.get("reason"),
            )

        return CallResult(
            function=function,
            status=status,
            value=value,
            transaction_id=transaction_id,
            receipts=list(outcome.get("receipts") or []),
            raw_output=output,
        )

    def simulate(
        self, contract: Contract, function: str, args: Sequence[Any] = ()
    ) -> CallResult:
        output = self.forc.call(
            contract.contract_id,
            contract.abi_path,
            function,
            args,
            signing_key=contract.wallet.private_key_hex,
            mode=CALL_MODE_SIMULATE,
        )
        value, _ = parse_call_output(output)
        return CallResult(function=function, status="success", value=value, raw_output=output)
