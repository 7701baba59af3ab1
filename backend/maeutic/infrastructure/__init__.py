"""Infrastructure Layer — database, crypto, credentials and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or services/
    - All external failures mapped to core/errors.py types
"""
