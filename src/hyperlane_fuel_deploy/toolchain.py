"""forc toolchain wrapper for hyperlane-fuel-deploy."""

import logging
import re
import subprocess
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from .constants import DEFAULT_FORC_BINARY
from .exceptions import ToolchainError

logger = logging.getLogger(__name__)

CALL_MODE_LIVE = "live"
CALL_MODE_SIMULATE = "simulate"

_RESULT_RE = re.compile(r"^\s*result:\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE)
_TX_ID_RE = re.compile(
    r"(?:transaction id|tx[ _]?id|tx hash)\s*[:=]\s*(?:0x)?([0-9a-f]{64})",
    re.IGNORECASE,
)
_CONTRACT_ID_RE = re.compile(
    r"contract(?: id)?\s*[:=]?\s*(?:0x)?([0-9a-f]{64})", re.IGNORECASE
)


def format_call_arg(value: Any) -> str:
    """
    Render a Python value as a forc call argument literal.

    ints become decimal, bytes become 0x-hex, and sequences become
    bracketed lists ("[1, 2, 3]"). Strings pass through unchanged.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_call_arg(v) for v in value) + "]"
    return str(value)


def parse_call_output(output: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Extract the returned value and transaction ID from `forc call` output.

    Returns:
        Tuple of (value, transaction_id); either is None if not printed
    """
    value = None
    results = _RESULT_RE.findall(output)
    if results:
        value = results[-1]

    tx_id = None
    match = _TX_ID_RE.search(output)
    if match:
        tx_id = "0x" + match.group(1).lower()

    return value, tx_id


def parse_deploy_output(output: str) -> Optional[str]:
    """Extract the deployed contract ID from `forc deploy` output."""
    matches = _CONTRACT_ID_RE.findall(output)
    if not matches:
        return None
    return "0x" + matches[-1].lower()


class Forc:
    """Runs forc subcommands against one node."""

    def __init__(self, node_url: str, binary: str = DEFAULT_FORC_BINARY):
        self.node_url = node_url
        self.binary = binary

    def run(self, args: List[str], cwd: Optional[Path] = None) -> str:
        """
        Run a forc subcommand and return its stdout.

        Raises:
            ToolchainError: If forc is not installed or exits non-zero
        """
        command = [self.binary, *args]
        logger.debug("Running %s", " ".join(command[:2]))
        try:
            result = subprocess.run(
                command,
                check=True,
                capture_output=True,
                text=True,
                cwd=cwd,
            )
        except FileNotFoundError as e:
            raise ToolchainError(
                f"forc binary '{self.binary}' not found. Install the Fuel toolchain."
            ) from e
        except subprocess.CalledProcessError as e:
            # Not chained: the failed command line carries the signing key
            raise ToolchainError(
                f"`forc {args[0]}` failed with exit code {e.returncode}: "
                f"{(e.stderr or '').strip()}"
            ) from None
        return result.stdout

    def deploy(
        self,
        project_dir: Path,
        salt: str,
        signing_key: str,
        build_profile: Optional[str] = None,
    ) -> str:
        """Deploy a forc project with a fixed salt. Returns forc's stdout."""
        args = [
            "deploy",
            f"--path={project_dir}",
            f"--node-url={self.node_url}",
            f"--salt={salt}",
            f"--signing-key={signing_key}",
        ]
        if build_profile is not None:
            args.append(f"--build-profile={build_profile}")
        return self.run(args)

    def call(
        self,
        contract_id: str,
        abi_path: Path,
        function: str,
        args: Iterable[Any],
        signing_key: str,
        mode: str = CALL_MODE_LIVE,
        contracts: Iterable[str] = (),
    ) -> str:
        """
        Call a contract function. Returns forc's stdout.

        Args:
            contract_id: Contract to call
            abi_path: JSON ABI of that contract
            function: Function name
            args: Function arguments, rendered with format_call_arg
            signing_key: Hex private key paying for the call
            mode: "live" submits a transaction, "simulate" does not
            contracts: IDs of other contracts the call reaches
        """
        command = [
            "call",
            f"--abi={abi_path}",
            f"--mode={mode}",
            f"--node-url={self.node_url}",
            f"--signing-key={signing_key}",
        ]
        command.extend(f"--contracts={contract}" for contract in contracts)
        command.extend([contract_id, function])
        command.extend(format_call_arg(arg) for arg in args)
        return self.run(command)
