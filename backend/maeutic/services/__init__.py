"""Services Layer — IO around the pure core: queries, transactions, permission checks.

Invariants:
    - One service class per feature area, constructed per request with an AsyncSession
    - Services raise core/errors.py types; HTTP mapping happens in api/error_handlers.py
"""
