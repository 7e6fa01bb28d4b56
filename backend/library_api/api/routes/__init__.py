"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes never contain business logic (delegate to core/services)
    - Each write route declares its FieldRule tuple beside the handler

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
