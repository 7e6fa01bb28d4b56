"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Field names match the JSON keys clients already consume (copyDifference,
      newAvailableCopies stay camelCase)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
