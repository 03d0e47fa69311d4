"""Services Layer — authentication, stock ledger, queries, user admin, seeding.

Invariants:
    - Services take repositories by injection, never construct sessions themselves
    - Business rules are delegated to core/ pure functions

Design Decisions:
    - One service class per concern for locality
"""
