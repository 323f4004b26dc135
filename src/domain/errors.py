"""
Page service error taxonomy.

Every failure raised by the page, link and upload services is one of four
kinds. Ownership mismatches are reported as not-found so that callers never
learn whether a page they do not own exists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal

ErrorKind = Literal["invalid_argument", "not_found", "conflict", "dependency_failure"]

GENERIC_FAILURE_MESSAGE = "Service temporarily unavailable"


@dataclass(frozen=True)
class ErrorDetail:
    """Error reported to callers by component entry points."""

    kind: ErrorKind
    code: str
    message: str
    field: str | None = None


class PageError(Exception):
    """Base class for page service errors."""

    kind: ClassVar[ErrorKind]

    def __init__(self, code: str, message: str, field: str | None = None) -> None:
        self.code = code
        self.message = message
        self.field = field
        super().__init__(message)

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(kind=self.kind, code=self.code, message=self.message, field=self.field)


class InvalidArgumentError(PageError):
    """Malformed id, empty upload, malformed reorder set and similar."""

    kind = "invalid_argument"


class NotFoundError(PageError):
    """Referenced page or collection item does not exist for this owner."""

    kind = "not_found"


class ConflictError(PageError):
    """Duplicate page id, or optimistic write retries exhausted."""

    kind = "conflict"


class DependencyFailureError(PageError):
    """
    A store or object-storage call failed.

    The message is always generic; the underlying exception is logged where
    it is caught and chained as __cause__, never copied into the message.
    """

    kind = "dependency_failure"

    def __init__(self, code: str = "dependency_failure") -> None:
        super().__init__(code, GENERIC_FAILURE_MESSAGE)
