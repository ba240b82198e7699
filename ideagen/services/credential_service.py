"""
Credential store for provider API keys.
Keys are persisted in a YAML file keyed by provider id, with environment
variables as a fallback.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional
import yaml

from ideagen.utils.config import config
from ideagen.utils.logger import logger


class CredentialStore:
    """Service for reading and persisting provider API keys."""

    def __init__(self, path: Optional[Path] = None, env_vars: Optional[Dict[str, str]] = None):
        """
        Initialize the credential store.

        Args:
            path: YAML file holding the keys, defaults to the configured file
            env_vars: Mapping of provider id to fallback environment variable
        """
        self.path = Path(path) if path is not None else config.api_keys_file
        self.env_vars = env_vars if env_vars is not None else config.api_key_env_vars
        self._keys = self._load()

    def _load(self) -> Dict[str, str]:
        """Load stored keys from the YAML file."""
        if not self.path.exists():
            return {}

        with open(self.path, 'r') as file:
            stored = yaml.safe_load(file) or {}
        if not isinstance(stored, dict):
            logger.warning(f"Ignoring malformed credential file {self.path}")
            return {}
        return {str(provider_id): str(key) for provider_id, key in stored.items() if key}

    def _save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as file:
            yaml.safe_dump(self._keys, file, default_flow_style=False)
        logger.info(f"Credentials saved to {self.path}")

    def get(self, provider_id: str) -> Optional[str]:
        """
        Look up the API key for a provider.

        Args:
            provider_id: Provider id, e.g. "openai"

        Returns:
            The key, or None when no non-blank key is configured
        """
        key = self._keys.get(provider_id)
        if not key and provider_id in self.env_vars:
            key = os.getenv(self.env_vars[provider_id])
        if key and key.strip():
            return key.strip()
        return None

    def set(self, provider_id: str, key: str):
        """Store a key for a provider, removing it when the key is blank."""
        if not key or not key.strip():
            self.remove(provider_id)
            return
        self._keys[provider_id] = key.strip()
        self._save()

    def remove(self, provider_id: str):
        if self._keys.pop(provider_id, None) is not None:
            self._save()

    def configured(self, provider_ids: List[str]) -> List[str]:
        """Return the subset of provider ids that have a key, in order."""
        return [provider_id for provider_id in provider_ids if self.get(provider_id)]
