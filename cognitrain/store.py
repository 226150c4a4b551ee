"""Durable key-value store backed by one JSON file per key.

Files live in the data directory (``~/.cognitrain`` by default) and are
named ``<prefix><key>.json``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from cognitrain.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "cognitrain_"


class LoadError(str, Enum):
    MISSING = "missing"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of :meth:`DurableStore.try_load`."""

    value: Any = None
    error: LoadError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: Any) -> Any:
        return self.value if self.ok else default


class DurableStore:
    """Typed get/set/remove of JSON values under namespaced keys."""

    def __init__(self, data_dir: str | Path, prefix: str = DEFAULT_PREFIX):
        self.data_dir = Path(os.path.expanduser(str(data_dir)))
        self.prefix = prefix
        self._lock = threading.Lock()

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{self.prefix}{key}.json"

    def try_load(self, key: str) -> LoadResult:
        """Read ``key``; missing and unparsable payloads come back as errors."""
        path = self.path_for(key)
        with self._lock:
            try:
                with open(path, encoding="utf-8") as f:
                    return LoadResult(value=json.load(f))
            except FileNotFoundError:
                return LoadResult(error=LoadError.MISSING)
            except (ValueError, RecursionError, OSError) as e:
                # ValueError covers JSONDecodeError, UnicodeDecodeError and the int digit limit
                logger.warning(f"Unreadable payload for '{key}' at {path}: {e}")
                return LoadResult(error=LoadError.CORRUPT)

    def read(self, key: str) -> Any:
        return self.try_load(key).value_or(None)

    def write(self, key: str, value: Any) -> None:
        """Serialize ``value`` and atomically replace the stored payload."""
        path = self.path_for(key)
        try:
            payload = json.dumps(value, indent=2)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot serialize value for '{key}': {e}") from e

        with self._lock:
            tmp_name = None
            try:
                os.makedirs(self.data_dir, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.data_dir, prefix=f".{self.prefix}{key}.", suffix=".tmp",
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, path)
            except OSError as e:
                if tmp_name and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise StorageError(f"Failed to write '{key}' to {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                return
            except OSError as e:
                raise StorageError(f"Failed to remove '{key}' at {path}: {e}") from e

    def keys(self) -> list[str]:
        """Un-prefixed keys that currently have a payload on disk."""
        if not self.data_dir.is_dir():
            return []
        found = []
        for p in sorted(self.data_dir.glob(f"{self.prefix}*.json")):
            found.append(p.name[len(self.prefix):-len(".json")])
        return found
