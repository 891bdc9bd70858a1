"""Services Layer — orchestrates core rules around repository IO.

Invariants:
    - Services own the order of checks: visibility → version → state machine → completeness
    - Services never build SQL; they go through a CardRepository
"""
