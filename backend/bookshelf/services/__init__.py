"""Services Layer: request orchestration between the gate, validation, and repositories.

Invariants:
    - Handlers receive their repository by injection (no module-level datastore handle)
    - Handlers raise BookshelfError subclasses; routes never map status codes by hand
"""
