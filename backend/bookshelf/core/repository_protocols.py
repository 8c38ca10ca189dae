"""Boundary Protocols: contracts between core rules and the persistence shell.

Invariants:
    - Core never imports from the shell; implementations are injected
    - Write methods return affected-row counts; 0 means "not found", never an error

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
"""

from typing import Any, Mapping, Protocol

from bookshelf.core.domain_types import (
    BookId, BookLookup, BookRecord, KeyStatus, ListFilter,
)


class BookRepository(Protocol):
    """Contract for book persistence: implemented by SqlBookRepository."""
    async def list(self, list_filter: ListFilter) -> list[BookRecord]: ...
    async def get(self, book_id: BookId) -> BookLookup: ...
    async def create(self, book: Mapping[str, Any]) -> BookId: ...
    async def update(
        self, book_id: BookId, attributes: Mapping[str, Any],
    ) -> int: ...
    async def delete(self, book_id: BookId) -> int: ...


class ApiKeyLookup(Protocol):
    """Contract for credential verification: may raise on backend failure."""
    async def check(self, api_key: str) -> KeyStatus: ...
