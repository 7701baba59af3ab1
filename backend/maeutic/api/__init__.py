"""API Layer — FastAPI routes, auth dependencies, presenters and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
"""
