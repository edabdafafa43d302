"""Run configuration for hyperlane-fuel-deploy."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from .constants import (
    DEFAULT_BUILD_PROFILE,
    DEFAULT_CONTRACT_SALT,
    DEFAULT_FORC_BINARY,
    DEFAULT_NODE_URL,
    DEFAULT_PRIVATE_KEY,
    DEFAULT_TIMEOUT,
)
from .contract_id import parse_hex
from .paths import get_default_contracts_dir

# Environment variables read by DeployConfig.from_env()
ENV_NODE_URL = "FUEL_NODE_URL"
ENV_PRIVATE_KEY = "FUEL_PRIVATE_KEY"
ENV_CONTRACT_SALT = "FUEL_CONTRACT_SALT"
ENV_CONTRACTS_DIR = "HYPERLANE_CONTRACTS_DIR"
ENV_BUILD_PROFILE = "FORC_BUILD_PROFILE"
ENV_FORC_BINARY = "FORC_BINARY"


@dataclass(frozen=True)
class DeployConfig:
    """Everything one deploy run depends on."""

    node_url: str = DEFAULT_NODE_URL
    private_key: str = DEFAULT_PRIVATE_KEY
    salt: str = DEFAULT_CONTRACT_SALT
    contracts_dir: Optional[Path] = None  # defaults to ../contracts
    build_profile: str = DEFAULT_BUILD_PROFILE
    forc_binary: str = DEFAULT_FORC_BINARY
    send_message: bool = False
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self):
        # Fail early on malformed keys rather than halfway through a deploy
        parse_hex(self.private_key, 32)
        parse_hex(self.salt, 32)

    @property
    def salt_bytes(self) -> bytes:
        return parse_hex(self.salt, 32)

    def resolved_contracts_dir(self) -> Path:
        if self.contracts_dir is None:
            return get_default_contracts_dir()
        return Path(self.contracts_dir).absolute()

    @classmethod
    def from_env(cls, **overrides: Any) -> "DeployConfig":
        """
        Build a config from environment variables.

        Explicit overrides win over the environment, which wins over the
        defaults in constants.py. Overrides set to None are ignored.

        Args:
            **overrides: Field values to use regardless of the environment

        Returns:
            DeployConfig
        """
        config = cls()
        env_values = {
            "node_url": os.environ.get(ENV_NODE_URL),
            "private_key": os.environ.get(ENV_PRIVATE_KEY),
            "salt": os.environ.get(ENV_CONTRACT_SALT),
            "contracts_dir": os.environ.get(ENV_CONTRACTS_DIR),
            "build_profile": os.environ.get(ENV_BUILD_PROFILE),
            "forc_binary": os.environ.get(ENV_FORC_BINARY),
        }
        values = {k: v for k, v in env_values.items() if v is not None}
        values.update({k: v for k, v in overrides.items() if v is not None})

        if values.get("contracts_dir") is not None:
            values["contracts_dir"] = Path(values["contracts_dir"])

        return replace(config, **values)
