"""
Clock interface.

All timestamps are timezone-aware UTC. Injected so tests can pin time.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class ClockPort(Protocol):
    """Time source."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
