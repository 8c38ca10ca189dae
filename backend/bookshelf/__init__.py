"""Bookshelf Application Package: book record CRUD service.

Invariants:
    - Package root contains no executable code (no import side effects)
"""
