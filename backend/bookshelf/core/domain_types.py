"""Domain Types: identifiers, enums, and value objects shared by core and shell.

Invariants:
    - BookRecord is immutable; mutation happens only through the repository
    - BOOK_COLUMNS order is the single source for select lists and sort keys
    - MUTABLE_FIELDS never contains id or added_dttm
    - BookLookup always carries exactly one of: record (FOUND), error (FAULT), neither (NOT_FOUND)

Design Decisions:
    - NewType for BookId: zero runtime cost, type-checker support
    - Tagged BookLookup instead of None/exception conflation for reads
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType

from bookshelf.core.errors import StorageError


# ─── Identity Types ──────────────────────────────────────────────

BookId = NewType("BookId", str)


# ─── Field Sets ──────────────────────────────────────────────────

BOOK_COLUMNS: tuple[str, ...] = (
    "id", "author", "price", "description", "year_published", "added_dttm",
)
CREATABLE_FIELDS: tuple[str, ...] = (
    "author", "price", "description", "year_published",
)
MUTABLE_FIELDS: frozenset[str] = frozenset(CREATABLE_FIELDS)


# ─── Enums ───────────────────────────────────────────────────────

class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class LookupOutcome(str, Enum):
    """Result tag for single-record reads."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAULT = "fault"


class KeyStatus(str, Enum):
    """Answer of the API key lookup collaborator."""
    VALID = "valid"
    INVALID = "invalid"
    UNKNOWN = "unknown"


class AccessDecision(str, Enum):
    """Terminal decision of the authorization gate."""
    ALLOW = "allow"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class BookRecord:
    """A stored book row."""
    id: BookId
    author: str
    price: float
    description: str | None
    year_published: int
    added_dttm: datetime | None = None


@dataclass(frozen=True)
class ListFilter:
    """Validated listing parameters. limit=None means unbounded."""
    limit: int | None = None
    offset: int = 0
    sort_by: str | None = None
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class BookLookup:
    outcome: LookupOutcome
    record: BookRecord | None = None
    error: StorageError | None = None

    @classmethod
    def found(cls, record: BookRecord) -> "BookLookup":
        return cls(LookupOutcome.FOUND, record=record)

    @classmethod
    def not_found(cls) -> "BookLookup":
        return cls(LookupOutcome.NOT_FOUND)

    @classmethod
    def fault(cls, error: StorageError) -> "BookLookup":
        return cls(LookupOutcome.FAULT, error=error)
