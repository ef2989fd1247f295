"""Client configuration for CaseDevMCP."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

CASEDEV_API_URL = "https://api.case.dev"
DEFAULT_PROVIDER_ID = "thurgood"


def _default_auth_file() -> Path:
    return Path.home() / ".local" / "share" / "opencode" / "auth.json"


def _default_config_file() -> Path:
    return Path.home() / ".config" / "opencode" / "opencode.json"


class ClientConfig(BaseModel):
    """Configuration for the Case.dev client and its services."""

    model_config = ConfigDict(extra="forbid")

    base_url: str = Field(CASEDEV_API_URL, description="Case.dev API base URL")
    timeout_ms: int = Field(
        30000,
        description="Default request deadline in milliseconds",
        gt=0,
    )
    transfer_timeout_ms: int = Field(
        300000,
        description="Deadline for byte transfers to blob storage in milliseconds",
        gt=0,
    )
    provider_id: str = Field(
        DEFAULT_PROVIDER_ID,
        description="Provider key used in the auth record and config file",
    )
    auth_file: Path = Field(
        default_factory=_default_auth_file,
        description="JSON file holding persisted provider credentials",
    )
    config_file: Path = Field(
        default_factory=_default_config_file,
        description="JSON config file with provider options",
    )
    verify_uploads: bool = Field(
        False,
        description="Read uploaded objects back and compare them with the local bytes",
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        """Create a config from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            ClientConfig instance.

        Raises:
            ValueError: If a numeric variable is not a valid integer.
        """
        env = os.environ if environ is None else environ
        values = {}

        def _int(key: str) -> Optional[int]:
            raw = env.get(key) or None
            if raw is None:
                return None
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"Environment variable '{key}' is not a valid integer: '{raw}'.")

        if env.get("CASEDEV_API_URL"):
            values["base_url"] = env["CASEDEV_API_URL"].rstrip("/")
        if env.get("CASEDEV_PROVIDER_ID"):
            values["provider_id"] = env["CASEDEV_PROVIDER_ID"]
        if env.get("CASEDEV_AUTH_FILE"):
            values["auth_file"] = Path(env["CASEDEV_AUTH_FILE"]).expanduser()
        if env.get("CASEDEV_CONFIG_FILE"):
            values["config_file"] = Path(env["CASEDEV_CONFIG_FILE"]).expanduser()

        timeout_ms = _int("CASEDEV_TIMEOUT_MS")
        if timeout_ms is not None:
            values["timeout_ms"] = timeout_ms
        transfer_timeout_ms = _int("CASEDEV_TRANSFER_TIMEOUT_MS")
        if transfer_timeout_ms is not None:
            values["transfer_timeout_ms"] = transfer_timeout_ms

        verify = env.get("CASEDEV_VERIFY_UPLOADS")
        if verify:
            values["verify_uploads"] = verify.lower() in ("true", "1", "yes")

        return cls(**values)
