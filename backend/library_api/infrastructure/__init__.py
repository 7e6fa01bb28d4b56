"""Infrastructure Layer — the store collaborator and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Every store call translates SQLAlchemyError into StoreFailureError

Design Decisions:
    - Thin wrappers over SQLAlchemy Core: one parameterized statement per call
"""
