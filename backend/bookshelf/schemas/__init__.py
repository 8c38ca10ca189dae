"""Pydantic Schemas: response contracts for API endpoints.

Invariants:
    - Request bodies are NOT modelled here; the validation engine owns write rules
"""
