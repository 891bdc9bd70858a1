"""Concurrency Guard — optimistic locking on the card version counter.

Invariants:
    - A mutation proceeds only when the caller's version equals the stored version
    - Each successful mutation advances the version by exactly 1
    - The store repeats this comparison atomically at write time (compare-and-set);
      this module is the early, pure half of the check
"""

from clarityflow.core.errors import VersionConflict


def check_version(current_version: int, provided_version: int) -> None:
    """Raise VersionConflict when the caller holds a stale version."""
    if provided_version != current_version:
        raise VersionConflict(current_version, provided_version)
