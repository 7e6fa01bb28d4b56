"""API Layer — FastAPI routes, request dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; all errors use the {"error": message} body

Design Decisions:
    - Thin routes delegate to the repository, procedure gateway, or services
"""
