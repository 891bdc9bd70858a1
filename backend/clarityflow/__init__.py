"""ClarityFlow Application Package — clarification card lifecycle service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
