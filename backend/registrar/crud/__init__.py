"""
Data-access layer: one module of query builders per entity.

Functions here never commit; the service layer owns the transaction.
"""
