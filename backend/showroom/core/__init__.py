"""Core Layer: domain constants, error hierarchy and repository contracts. No IO.

Invariants:
    - No module in core/ imports from repositories/, api/ or infrastructure/
"""
