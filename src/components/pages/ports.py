"""
Pages component - Port interfaces.

The page store protocol lives in src.core.ports.db because the links
component writes through the same store.
"""

from __future__ import annotations

from src.core.ports.db import PageRepoPort, PageStoreError
from src.core.ports.time import ClockPort

__all__ = ["ClockPort", "PageRepoPort", "PageStoreError"]
