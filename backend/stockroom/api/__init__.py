"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (except the HTML product list
      and the plain-text index)

Design Decisions:
    - Thin routes delegate to services; services delegate rules to core/
"""
