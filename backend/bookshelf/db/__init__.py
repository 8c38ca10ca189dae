"""Database package: declarative base and standalone session factory.

Invariants:
    - Base.metadata is the single source of truth for table definitions
"""
