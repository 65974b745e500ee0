"""Infrastructure Layer — database, crypto primitives, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Crypto is delegated to bcrypt and PyJWT, never reimplemented
"""
