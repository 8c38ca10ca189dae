"""Validation Engine: pure field and record rules for book writes and listing filters.

Invariants:
    - Fail-fast: the first violated rule (in BOOK_FIELD_RULES order) is raised
    - Unknown attribute names are ignored here; filter_mutable strips them before updates
    - bool is never accepted as a number (Python bool subclasses int)
    - No I/O, no side effects

Design Decisions:
    - Declarative field -> rule table iterated once per call, no per-field branching
    - id is checked by validate_book_id at the boundary that creates it, not by the table
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from bookshelf.core.domain_types import (
    BOOK_COLUMNS, MUTABLE_FIELDS, ListFilter, SortDirection,
)
from bookshelf.core.errors import InvalidArgumentError

# Column ceilings: Integer for year_published, BIGINT bind for LIMIT/OFFSET
MAX_YEAR_PUBLISHED = 2**31 - 1
MAX_QUERY_INT = 2**63 - 1


@dataclass(frozen=True)
class FieldRule:
    """One attribute rule: predicate plus the message raised when it fails."""
    required: bool
    check: Callable[[Any], bool]
    reason: str


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def _is_non_negative_number(value: Any) -> bool:
    return _is_number(value) and value >= 0


def _is_year(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= MAX_YEAR_PUBLISHED


def _is_optional_string(value: Any) -> bool:
    return value is None or isinstance(value, str)


BOOK_FIELD_RULES: dict[str, FieldRule] = {
    "author": FieldRule(
        True, _is_non_empty_string, "author must be a non-empty string",
    ),
    "price": FieldRule(
        True, _is_non_negative_number, "price must be a non-negative number",
    ),
    "description": FieldRule(
        False, _is_optional_string, "description must be a string",
    ),
    "year_published": FieldRule(
        True, _is_year,
        f"year_published must be an integer between 0 and {MAX_YEAR_PUBLISHED}",
    ),
}


def check_field(name: str, value: Any) -> tuple[bool, str | None]:
    """Evaluate a single attribute. Unknown names pass."""
    rule = BOOK_FIELD_RULES.get(name)
    if rule is None:
        return True, None
    if rule.required and value is None:
        return False, f"{name} is required"
    if rule.check(value):
        return True, None
    return False, rule.reason


def _raise_first_failure(attributes: Mapping[str, Any], names) -> None:
    for name in names:
        ok, reason = check_field(name, attributes.get(name))
        if not ok:
            raise InvalidArgumentError(reason, field_name=name)


def validate_book(attributes: Mapping[str, Any]) -> None:
    """Full-record check: every required field present and valid."""
    _raise_first_failure(attributes, BOOK_FIELD_RULES)


def validate_partial(attributes: Mapping[str, Any]) -> None:
    """Check only the attributes actually present."""
    _raise_first_failure(
        attributes, [name for name in BOOK_FIELD_RULES if name in attributes],
    )


def validate_book_id(value: Any) -> str:
    """Rule for system-generated or path-supplied ids."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(
            "id must be a non-empty string", field_name="id",
        )
    return value


def filter_mutable(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only allow-listed mutable attributes."""
    return {k: v for k, v in attributes.items() if k in MUTABLE_FIELDS}


# ─── Listing Filters ─────────────────────────────────────────────

def _parse_non_negative_int(name: str, raw: str | None) -> int | None:
    if raw is None:
        return None
    text = raw.strip()
    # str.isdigit() alone also accepts superscripts and other Unicode digits
    if not (text.isascii() and text.isdigit()):
        raise InvalidArgumentError(
            f"{name} must be a non-negative integer", field_name=name,
        )
    value = int(text)
    if value > MAX_QUERY_INT:
        raise InvalidArgumentError(
            f"{name} must be at most {MAX_QUERY_INT}", field_name=name,
        )
    return value


def build_list_filter(
    limit: str | None = None,
    offset: str | None = None,
    sort_by: str | None = None,
    desc: bool = False,
) -> ListFilter:
    """Turn raw query-string values into a validated ListFilter."""
    parsed_limit = _parse_non_negative_int("limit", limit)
    parsed_offset = _parse_non_negative_int("offset", offset) or 0
    if sort_by is not None and sort_by not in BOOK_COLUMNS:
        raise InvalidArgumentError(
            f"sortBy must be one of: {', '.join(BOOK_COLUMNS)}",
            field_name="sortBy",
        )
    return ListFilter(
        limit=parsed_limit,
        offset=parsed_offset,
        sort_by=sort_by,
        direction=SortDirection.DESC if desc else SortDirection.ASC,
    )
