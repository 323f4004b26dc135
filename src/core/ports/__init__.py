# linkify-bio: Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from src.core.ports.db import PageRepoPort, PageStoreError
from src.core.ports.storage import (
    KeyExistsError,
    StorageError,
    StoragePort,
    StoredObject,
)
from src.core.ports.time import ClockPort

__all__ = [
    # Page store
    "PageRepoPort",
    "PageStoreError",
    # Object storage
    "StoragePort",
    "StoredObject",
    "StorageError",
    "KeyExistsError",
    # Time
    "ClockPort",
]
