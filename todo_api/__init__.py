"""Todo API Package — multi-user todo service with token authentication.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
