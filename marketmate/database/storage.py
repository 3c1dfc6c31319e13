"""
Key-value storage for persisted client state.

Mirrors the browser's local storage: named slots holding text, read and
overwritten wholesale. Every write or removal raises a change signal to the
registered listeners, which lets several bag instances sharing a slot
resynchronize after another writer touches it.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base exception for storage read/write failures"""
    pass


class StorageQuotaExceeded(StorageError):
    """Raised when a write would exceed the configured quota"""
    pass


class StorageCorruptError(StorageError):
    """Raised when a slot exists but its bytes are not readable text"""
    pass


@dataclass
class StorageEvent:
    """Change signal for a single slot"""
    key: str
    new_value: Optional[str]
    origin: Any = None


StorageListener = Callable[[StorageEvent], None]


class KeyValueStorage:
    """Base class for slot storage with change-signal fan-out"""

    def __init__(self):
        self._listeners: list[StorageListener] = []

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str, origin: Any = None) -> None:
        raise NotImplementedError

    def remove_item(self, key: str, origin: Any = None) -> None:
        raise NotImplementedError

    def add_listener(self, listener: StorageListener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it"""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _emit(self, key: str, new_value: Optional[str], origin: Any) -> None:
        event = StorageEvent(key=key, new_value=new_value, origin=origin)
        for listener in list(self._listeners):
            # A failing listener must not fail the writer or starve the others
            try:
                listener(event)
            except Exception:
                logger.exception(f"Storage listener failed for slot {key!r}")


class MemoryStorage(KeyValueStorage):
    """In-process storage, optionally bounded by a byte quota"""

    def __init__(self, quota_bytes: Optional[int] = None):
        super().__init__()
        self.quota_bytes = quota_bytes
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str, origin: Any = None) -> None:
        if self.quota_bytes is not None:
            used = sum(
                len(v.encode("utf-8")) for k, v in self._items.items() if k != key
            )
            if used + len(value.encode("utf-8")) > self.quota_bytes:
                raise StorageQuotaExceeded(
                    f"Writing {key!r} would exceed quota of {self.quota_bytes} bytes"
                )
        self._items[key] = value
        self._emit(key, value, origin)

    def remove_item(self, key: str, origin: Any = None) -> None:
        if self._items.pop(key, None) is not None:
            self._emit(key, None, origin)

    def keys(self) -> list[str]:
        return list(self._items)


class FileStorage(KeyValueStorage):
    """
    Directory-backed storage: one file per slot.

    Change signals are only raised to listeners registered on this instance.
    """

    def __init__(self, directory: str):
        super().__init__()
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{quote(key, safe='')}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise StorageCorruptError(f"Slot {path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set_item(self, key: str, value: str, origin: Any = None) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        self._emit(key, value, origin)

    def remove_item(self, key: str, origin: Any = None) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e
        self._emit(key, None, origin)


def create_storage(
    backend: str,
    directory: Optional[str] = None,
    quota_bytes: Optional[int] = None,
) -> KeyValueStorage:
    """Build the storage backend named in settings"""
    if backend == "memory":
        return MemoryStorage(quota_bytes=quota_bytes)
    if backend == "file":
        if not directory:
            raise ValueError("File storage requires a directory")
        logger.info(f"Using file storage at {directory}")
        return FileStorage(directory)
    raise ValueError(f"Unknown storage backend: {backend}")
