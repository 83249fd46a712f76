"""
Key-value byte stores for session snapshots.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .errors import PersistenceReadFailure, PersistenceWriteFailure

log = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Protocol every snapshot store implements."""

    def set(self, key: str, value: bytes) -> None:
        """
        Store ``value`` under ``key``, replacing any previous value.

        Raises:
            PersistenceWriteFailure: If the value could not be stored
        """
        ...

    def get(self, key: str) -> Optional[bytes]:
        """
        Return the value for ``key``, or None if there is none.

        Raises:
            PersistenceReadFailure: If the store could not be read
        """
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store, for tests and embedding."""

    def __init__(self, data: Optional[Dict[str, bytes]] = None):
        self.data: Dict[str, bytes] = dict(data or {})

    def set(self, key: str, value: bytes) -> None:
        self.data[key] = bytes(value)

    def get(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FileStore:
    """
    One ``<key>.json`` file per key inside ``directory``.

    Writes go to a temporary file that replaces the target, so a crash never
    leaves a half-written snapshot behind.
    """

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        reraise=True,
    )
    def _write(self, path: Path, value: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(value)
            os.replace(tmp, path)
        except OSError:
            Path(tmp).unlink(missing_ok=True)
            raise

    def set(self, key: str, value: bytes) -> None:
        path = self.path_for(key)
        try:
            self._write(path, value)
        except OSError as e:
            raise PersistenceWriteFailure(f"Could not write {path}: {e}") from e
        log.debug("Wrote %d bytes to %s", len(value), path)

    def get(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceReadFailure(f"Could not read {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceWriteFailure(f"Could not remove {path}: {e}") from e
