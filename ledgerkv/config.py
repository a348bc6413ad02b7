"""
Gateway configuration loaded from environment variables.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

# Default limit for request bodies (10MB)
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024


@dataclass
class GatewayConfig:
    """
    Settings for the contract gateway process.

    Attributes:
        host: Interface to bind.
        port: TCP port to bind (0 picks a free port).
        log_level: Name of a logging level, e.g. "INFO".
        max_body_bytes: Largest accepted request body.
        contract_name: Name reported in contract metadata.
    """

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    contract_name: str = "ledgerkv.contract"

    def __post_init__(self) -> None:
        if not self.host or not self.host.strip():
            raise ValueError("host cannot be empty")

        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be between 0 and 65535, got {self.port}")

        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

        if self.max_body_bytes <= 0:
            raise ValueError(
                f"max_body_bytes must be positive, got {self.max_body_bytes}"
            )

        if not self.contract_name or not self.contract_name.strip():
            raise ValueError("contract_name cannot be empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GatewayConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ).

        Returns:
            Validated GatewayConfig.
        """
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("LEDGERKV_HOST", cls.host),
            port=_int_var(env, "LEDGERKV_PORT", cls.port),
            log_level=env.get("LOG_LEVEL", cls.log_level),
            max_body_bytes=_int_var(env, "LEDGERKV_MAX_BODY_BYTES", cls.max_body_bytes),
            contract_name=env.get("LEDGERKV_CONTRACT_NAME", cls.contract_name),
        )


def _int_var(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
