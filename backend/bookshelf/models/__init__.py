"""ORM Models: SQLAlchemy declarative tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model is imported here so Base.metadata is complete for create_all/alembic
"""

from bookshelf.models.book import Book  # noqa: F401
from bookshelf.models.api_key import ApiKey  # noqa: F401
