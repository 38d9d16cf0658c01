"""Persistent storage for the flight API access key.

The store is a small JSON key-value file; only one key is used. There is no
built-in fallback key: no stored value means the mock data path is used.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CREDENTIAL_KEY = "aviationStackApiKey"


class CredentialStore:
    def __init__(self, path: str | Path, key: str = CREDENTIAL_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as fh:
            try:
                data = json.load(fh)
            except json.JSONDecodeError:
                logger.warning("Ignoring unreadable storage file %s", self.path)
                return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)

    def load(self) -> Optional[str]:
        """Return the stored key or ``None``."""
        value = self._read().get(self.key)
        return value or None

    def save(self, value: str) -> None:
        data = self._read()
        data[self.key] = value
        self._write(data)
        logger.info("Stored access key in %s", self.path)

    def clear(self) -> None:
        data = self._read()
        if data.pop(self.key, None) is not None:
            self._write(data)
            logger.info("Removed access key from %s", self.path)


__all__ = ["CREDENTIAL_KEY", "CredentialStore"]
