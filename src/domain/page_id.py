"""
Page identifier syntax.

Pure functions; no store access. Uniqueness is the store's job.
"""

from __future__ import annotations

import re
from typing import cast

from src.domain.errors import ErrorDetail, InvalidArgumentError
from src.rules.models import PageIdRules

DEFAULT_PAGE_ID_RULES = PageIdRules()


def validate_page_id(
    page_id: object,
    rules: PageIdRules | None = None,
    *,
    field: str = "id",
) -> list[ErrorDetail]:
    """Validate page id syntax. Returns the first violation found, if any."""
    rules = rules or DEFAULT_PAGE_ID_RULES

    if not isinstance(page_id, str) or not page_id:
        return [
            ErrorDetail(
                kind="invalid_argument",
                code="page_id_required",
                message="Page id is required",
                field=field,
            )
        ]

    if len(page_id) < rules.min or len(page_id) > rules.max:
        return [
            ErrorDetail(
                kind="invalid_argument",
                code="page_id_length",
                message=f"Page id must be between {rules.min} and {rules.max} characters",
                field=field,
            )
        ]

    if not re.fullmatch(rules.pattern, page_id):
        return [
            ErrorDetail(
                kind="invalid_argument",
                code="page_id_invalid",
                message=(
                    "Page id may only contain lowercase letters, digits, '.', '_' and '-', "
                    "and must start and end with a letter or digit"
                ),
                field=field,
            )
        ]

    if page_id in rules.reserved:
        return [
            ErrorDetail(
                kind="invalid_argument",
                code="page_id_reserved",
                message=f"Page id '{page_id}' is reserved",
                field=field,
            )
        ]

    return []


def ensure_valid_page_id(
    page_id: object,
    rules: PageIdRules | None = None,
    *,
    field: str = "id",
) -> str:
    """Raise InvalidArgumentError unless page_id is syntactically valid."""
    errors = validate_page_id(page_id, rules, field=field)
    if errors:
        err = errors[0]
        raise InvalidArgumentError(err.code, err.message, err.field)
    # validate_page_id rejects every non-str value
    return cast(str, page_id)
