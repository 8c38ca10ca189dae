"""ApiKey ORM: credentials consulted by the authorization gate.

Invariants:
    - Only rows with is_valid=true authorize requests
    - Revoking a key flips is_valid; rows are never required to be deleted
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Text, func, true
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.db.base import Base


class ApiKey(Base):
    __tablename__ = "api_key"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    is_valid: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true(),
    )
    label: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
