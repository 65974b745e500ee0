"""Services Layer — credential store, authentication, and todo ownership.

Invariants:
    - Services wrap core rules with IO; they never parse HTTP
    - Every method is async and either returns an entity or raises a TodoApiError
"""
