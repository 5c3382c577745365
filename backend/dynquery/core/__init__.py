"""Core Layer - pure predicate logic, no IO, no async, no DB sessions.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Building a SQLAlchemy expression is pure: nothing here executes a statement

Design Decisions:
    - Functional core separated from imperative shell: the fold and the leaf
      builders are plain functions, the shell decides where predicates run
"""
