"""Core Layer: pure validation and authorization rules.

Invariants:
    - No I/O, no framework imports (FastAPI, SQLAlchemy stay in the shell)
    - Errors raised here are BookshelfError subclasses (core/errors.py)
"""
