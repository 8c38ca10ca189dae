"""Book Repository: parameterized SQL for the book table.

Invariants:
    - Values always travel as bound parameters; only fixed column identifiers
      from BOOK_COLUMNS reach the statement text
    - Every operation is a single statement; writes commit immediately
    - Writes are validated before any statement is built (no partial insert)
    - update/delete return the affected-row count; 0 means not found
    - get never raises for storage faults; it returns BookLookup.fault

Design Decisions:
    - SQLAlchemy Core against Book.__table__ rather than ORM unit-of-work:
      each call maps one-to-one onto the statement it executes
"""

import logging
from typing import Any, Mapping

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.core.domain_types import (
    BOOK_COLUMNS, CREATABLE_FIELDS, MUTABLE_FIELDS,
    BookId, BookLookup, BookRecord, ListFilter, SortDirection,
)
from bookshelf.core.errors import InvalidArgumentError, StorageError
from bookshelf.core.validation import (
    filter_mutable, validate_book, validate_book_id, validate_partial,
)
from bookshelf.models.book import Book

logger = logging.getLogger(__name__)

book_table = Book.__table__
_select_columns = [book_table.c[name] for name in BOOK_COLUMNS]


def _to_record(row) -> BookRecord:
    data = row._mapping
    return BookRecord(
        id=BookId(data["id"]),
        author=data["author"],
        price=float(data["price"]),
        description=data["description"],
        year_published=data["year_published"],
        added_dttm=data["added_dttm"],
    )


class SqlBookRepository:
    """BookRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _read(self, statement, operation: str, book_id: str | None = None):
        try:
            return await self._db.execute(statement)
        except SQLAlchemyError as e:
            raise self._fault(e, operation, book_id) from e

    async def _write(self, statement, operation: str, book_id: str | None = None):
        try:
            result = await self._db.execute(statement)
            await self._db.commit()
            return result
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise self._fault(e, operation, book_id) from e

    @staticmethod
    def _fault(
        exc: SQLAlchemyError, operation: str, book_id: str | None,
    ) -> StorageError:
        logger.error(
            f"Book {operation} failed: {exc}",
            extra={"operation": operation, "book_id": book_id},
        )
        return StorageError("Database operation failed", operation)

    async def get(self, book_id: BookId) -> BookLookup:
        statement = select(*_select_columns).where(book_table.c.id == book_id)
        try:
            result = await self._read(statement, "select", book_id)
        except StorageError as e:
            return BookLookup.fault(e)
        row = result.first()
        if row is None:
            return BookLookup.not_found()
        return BookLookup.found(_to_record(row))

    async def create(self, book: Mapping[str, Any]) -> BookId:
        """Insert a fully validated book. added_dttm comes from the column default."""
        book_id = validate_book_id(book.get("id"))
        validate_book(book)
        values = {name: book.get(name) for name in CREATABLE_FIELDS}
        statement = insert(book_table).values(id=book_id, **values)
        await self._write(statement, "insert", book_id)
        logger.info("Book created", extra={"book_id": book_id})
        return BookId(book_id)

    async def update(
        self, book_id: BookId, attributes: Mapping[str, Any],
    ) -> int:
        """Update exactly the allow-listed attributes present. Returns rows affected."""
        changes = filter_mutable(attributes)
        if not changes:
            raise InvalidArgumentError(
                "No updatable attributes supplied; allowed: "
                + ", ".join(sorted(MUTABLE_FIELDS)),
            )
        validate_partial(changes)
        statement = (
            update(book_table)
            .where(book_table.c.id == book_id)
            .values(**changes)
        )
        result = await self._write(statement, "update", book_id)
        return result.rowcount

    async def delete(self, book_id: BookId) -> int:
        statement = delete(book_table).where(book_table.c.id == book_id)
        result = await self._write(statement, "delete", book_id)
        return result.rowcount

    async def list(self, list_filter: ListFilter) -> "list[BookRecord]":
        """Rows ordered by the filter's sort key (added_dttm, id by default)."""
        keys = (
            [book_table.c[list_filter.sort_by]] if list_filter.sort_by
            else [book_table.c.added_dttm]
        )
        if list_filter.sort_by != "id":
            keys.append(book_table.c.id)
        if list_filter.direction is SortDirection.DESC:
            order = [key.desc() for key in keys]
        else:
            order = [key.asc() for key in keys]

        statement = select(*_select_columns).order_by(*order)
        if list_filter.offset:
            statement = statement.offset(list_filter.offset)
        if list_filter.limit is not None:
            statement = statement.limit(list_filter.limit)

        result = await self._read(statement, "select")
        return [_to_record(row) for row in result]
