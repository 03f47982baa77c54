"""Pydantic Schemas: request validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies)
    - Field names match the stored document keys (camelCase where the site uses it)
    - Unknown fields are dropped, never persisted
"""
