"""Custom exception classes for hyperlane-fuel-deploy."""


class DeployError(Exception):
    """Base exception for deploy tooling errors."""

    pass


class ArtifactNotFoundError(DeployError, FileNotFoundError):
    """Raised when a compiled contract artifact is not found."""

    pass


class InvalidHexError(DeployError, ValueError):
    """Raised when a hex literal (key, salt, id) is malformed."""

    pass


class RpcError(DeployError, RuntimeError):
    """Raised when the node's GraphQL API fails or returns errors."""

    pass


class ToolchainError(DeployError, RuntimeError):
    """Raised when the forc toolchain is missing or exits non-zero."""

    pass


class TransactionFailedError(DeployError, RuntimeError):
    """Raised when a submitted transaction does not succeed."""

    pass


class ContractIdMismatchError(DeployError, ValueError):
    """Raised when a fresh deployment lands at an unexpected contract ID."""

    pass
