"""Services Layer - orchestrates core predicate building around DB sessions.

Invariants:
    - Services own IO (AsyncSession); core/ stays pure
    - Routes call services, never core builders directly
"""
