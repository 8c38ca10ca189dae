"""Book ORM: the `book` table.

Invariants:
    - id is a text primary key supplied by the caller (UUID4 rendered as text)
    - author, price, year_published are non-nullable; description is nullable
    - added_dttm is assigned by the database at insert time and never updated
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, Numeric, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.db.base import Base


class Book(Base):
    __tablename__ = "book"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(
        Numeric(asdecimal=False), nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    year_published: Mapped[int] = mapped_column(Integer, nullable=False)
    added_dttm: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
