"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape and type at the system boundary (user input, API responses)
    - Domain rules (stock >= 0, login length, SKU uniqueness) are enforced in core/
      so every entry point gets them, not just HTTP

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Responses built from frozen domain records via from_attributes
"""
