"""Map component errors onto HTTP responses."""

from typing import NoReturn

from fastapi import HTTPException

from src.domain.errors import GENERIC_FAILURE_MESSAGE, ErrorDetail

STATUS_BY_KIND = {
    "invalid_argument": 400,
    "not_found": 404,
    "conflict": 409,
    "dependency_failure": 503,
}


def raise_for_errors(errors: tuple[ErrorDetail, ...]) -> NoReturn:
    """Raise the HTTPException for the first error's kind."""
    first = errors[0]
    status_code = STATUS_BY_KIND[first.kind]

    if first.kind == "dependency_failure":
        # Nothing about the failing dependency leaves the process
        raise HTTPException(status_code=status_code, detail=GENERIC_FAILURE_MESSAGE)

    raise HTTPException(
        status_code=status_code,
        detail=[
            {"code": err.code, "message": err.message, "field": err.field}
            for err in errors
        ],
    )
