"""Showroom Content API Package: categories, promo banner and gallery over MongoDB.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
