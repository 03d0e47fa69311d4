"""Infrastructure Layer — database, security primitives and logging.

Invariants:
    - Everything that touches IO, crypto libraries or the ORM lives here or in services/
    - core/ never imports from this package

Design Decisions:
    - Repositories here implement core/repository_protocols.py structurally
"""
