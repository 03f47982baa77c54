"""Repositories: MongoDB implementations of the contracts in core/repository_protocols.py.

Invariants:
    - Each repository touches exactly one collection (sync also uses a staging copy)
    - Driver calls are wrapped in translate_errors(); nothing PyMongo-specific escapes
"""
