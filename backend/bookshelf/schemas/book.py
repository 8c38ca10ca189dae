"""Book Schemas: public JSON shapes for book endpoints."""

from datetime import datetime

from pydantic import BaseModel

from bookshelf.core.domain_types import BookRecord


class BookResponse(BaseModel):
    """A stored book as returned by GET endpoints."""
    id: str
    author: str
    price: float
    description: str | None = None
    year_published: int
    added_dttm: datetime | None = None

    @classmethod
    def from_record(cls, record: BookRecord) -> "BookResponse":
        return cls(
            id=record.id,
            author=record.author,
            price=record.price,
            description=record.description,
            year_published=record.year_published,
            added_dttm=record.added_dttm,
        )


class BookCreated(BaseModel):
    id: str
