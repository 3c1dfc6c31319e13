# Database modules

from .products import ProductDatabase
from .bag import BagChange, BagStore, BagDatabase
from .comments import CommentDatabase
from .session import SessionStore, SessionDatabase
from .storage import (
    KeyValueStorage,
    MemoryStorage,
    FileStorage,
    StorageError,
    StorageCorruptError,
    StorageQuotaExceeded,
    StorageEvent,
    create_storage,
)

__all__ = [
    "ProductDatabase",
    "BagChange",
    "BagStore",
    "BagDatabase",
    "CommentDatabase",
    "SessionStore",
    "SessionDatabase",
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
    "StorageError",
    "StorageCorruptError",
    "StorageQuotaExceeded",
    "StorageEvent",
    "create_storage",
]
