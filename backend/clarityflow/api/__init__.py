"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Errors leave the API as {"error": {code, message, details, ...}}

Design Decisions:
    - Thin routes delegate to CardService
"""
