"""API Layer: FastAPI routers, dependencies, error handlers and body size limit.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes hold no persistence logic; they call one repository method each
"""
