"""
Links component - Port interfaces.

Links are embedded in the page record, so the only port is the page store.
"""

from __future__ import annotations

from src.core.ports.db import PageRepoPort

__all__ = ["PageRepoPort"]
