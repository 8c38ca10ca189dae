"""Infrastructure Layer: database access, repositories, and logging setup.

Invariants:
    - Infrastructure implements the protocols in core/repository_protocols.py
    - SQLAlchemy exceptions never cross this layer unmapped (StorageError)
"""
