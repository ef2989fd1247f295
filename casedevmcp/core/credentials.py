"""API key resolution.

The key is looked up on every request, in this order:

1. the ``THURGOOD_API_KEY`` or ``CASEDEV_API_KEY`` environment variable,
2. an ``api`` auth record persisted for the provider,
3. ``provider.<id>.options.apiKey`` in the config file.

Nothing is cached, so a rotated key is picked up by the next request.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .config import ClientConfig, DEFAULT_PROVIDER_ID

logger = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("THURGOOD_API_KEY", "CASEDEV_API_KEY")


def _read_json(path: Path) -> Dict[str, Any]:
    """Read a JSON object from disk, returning an empty dict when unavailable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.debug(f"Could not read {path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}


class AuthStore:
    """Persisted provider credentials (``{"<provider>": {"type": "api", "key": ...}}``)."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get(self, provider_id: str) -> Optional[Dict[str, Any]]:
        record = _read_json(self.path).get(provider_id)
        return record if isinstance(record, dict) else None


class ConfigStore:
    """Provider options from the JSON config file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def provider_options(self, provider_id: str) -> Dict[str, Any]:
        providers = _read_json(self.path).get("provider")
        if not isinstance(providers, dict):
            return {}
        provider = providers.get(provider_id)
        if not isinstance(provider, dict):
            return {}
        options = provider.get("options")
        return options if isinstance(options, dict) else {}


class CredentialResolver:
    """Resolves the Case.dev API key from env, auth store and config."""

    def __init__(
        self,
        auth_store: Optional[AuthStore] = None,
        config_store: Optional[ConfigStore] = None,
        provider_id: str = DEFAULT_PROVIDER_ID,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the resolver.

        Args:
            auth_store: Persisted auth records. Skipped when None.
            config_store: Provider options. Skipped when None.
            provider_id: Provider key to look up in both stores.
            environ: Environment mapping. Defaults to ``os.environ``, read at
                resolution time.
        """
        self.auth_store = auth_store
        self.config_store = config_store
        self.provider_id = provider_id
        self._environ = environ

    @classmethod
    def from_config(cls, config: ClientConfig) -> CredentialResolver:
        return cls(
            auth_store=AuthStore(config.auth_file),
            config_store=ConfigStore(config.config_file),
            provider_id=config.provider_id,
        )

    def resolve(self) -> Optional[str]:
        """Return the API key, or None when no source provides one."""
        environ = os.environ if self._environ is None else self._environ
        for name in API_KEY_ENV_VARS:
            key = environ.get(name)
            if key:
                return key

        if self.auth_store is not None:
            record = self.auth_store.get(self.provider_id)
            if record and record.get("type") == "api" and record.get("key"):
                return str(record["key"])

        if self.config_store is not None:
            key = self.config_store.provider_options(self.provider_id).get("apiKey")
            if key:
                return str(key)

        return None


class StaticCredentials:
    """A resolver that always returns the same key."""

    def __init__(self, key: Optional[str]):
        self._key = key

    def resolve(self) -> Optional[str]:
        return self._key
