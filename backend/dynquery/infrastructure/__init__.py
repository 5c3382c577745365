"""Infrastructure Layer - database plumbing and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ predicate logic (errors excepted)
    - Driver exceptions mapped to DynQueryError subclasses before leaving this layer
"""
