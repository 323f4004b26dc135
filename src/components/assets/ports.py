"""
Assets component port definitions.
"""

from __future__ import annotations

from src.core.ports.storage import StoragePort
from src.core.ports.time import ClockPort

__all__ = ["ClockPort", "StoragePort"]
