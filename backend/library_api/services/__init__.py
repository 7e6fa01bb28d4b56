"""Services — orchestration that sequences store IO around pure core functions.

Invariants:
    - Services depend on core protocols, not on concrete infrastructure classes
"""
