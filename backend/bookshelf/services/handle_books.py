"""Book Handlers: list, get, create, update, delete orchestration.

Invariants:
    - create generates the id (UUID4 text) before validation; client ids are discarded
    - update checks existence first, strips id, and treats 0 affected rows as not found
    - delete of an absent id is not found (404), not an idempotent success
    - Storage faults surface as StorageError and are never retried
"""

import logging
import uuid
from typing import Any, Mapping

from bookshelf.core.domain_types import BookId, BookRecord, LookupOutcome
from bookshelf.core.errors import ResourceNotFoundError
from bookshelf.core.repository_protocols import BookRepository
from bookshelf.core.validation import build_list_filter, validate_book_id

logger = logging.getLogger(__name__)


def generate_book_id() -> BookId:
    return BookId(str(uuid.uuid4()))


class BookHandlers:
    """Endpoint orchestration over an injected BookRepository."""

    def __init__(self, repository: BookRepository):
        self.repository = repository

    async def list_books(
        self,
        limit: str | None = None,
        offset: str | None = None,
        sort_by: str | None = None,
        desc: bool = False,
    ) -> list[BookRecord]:
        list_filter = build_list_filter(limit, offset, sort_by, desc)
        return await self.repository.list(list_filter)

    async def get_book(self, book_id: str) -> BookRecord:
        """Resolve one book or raise: 400 malformed id, 404 absent, 500 fault."""
        book_id = BookId(validate_book_id(book_id))
        lookup = await self.repository.get(book_id)
        if lookup.outcome is LookupOutcome.FAULT:
            raise lookup.error
        if lookup.outcome is LookupOutcome.NOT_FOUND:
            raise ResourceNotFoundError("Book", book_id)
        return lookup.record

    async def create_book(self, payload: Mapping[str, Any]) -> BookId:
        book = dict(payload)
        book["id"] = generate_book_id()
        return await self.repository.create(book)

    async def update_book(self, book_id: str, payload: Mapping[str, Any]) -> None:
        await self.get_book(book_id)
        attributes = {k: v for k, v in payload.items() if k != "id"}
        affected = await self.repository.update(BookId(book_id), attributes)
        if affected == 0:
            # Row removed between the existence check and the update
            raise ResourceNotFoundError("Book", book_id)
        logger.info("Book updated", extra={"book_id": book_id})

    async def delete_book(self, book_id: str) -> None:
        book_id = validate_book_id(book_id)
        affected = await self.repository.delete(BookId(book_id))
        if affected == 0:
            raise ResourceNotFoundError("Book", book_id)
        logger.info("Book deleted", extra={"book_id": book_id})
