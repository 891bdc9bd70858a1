"""Concurrency Guard — tests for the pure version comparison."""

import pytest

from clarityflow.core.enforce_version import check_version
from clarityflow.core.errors import VersionConflict


def test_matching_version_passes():
    check_version(2, 2)  # should not raise


def test_stale_version_raises_with_both_versions():
    with pytest.raises(VersionConflict) as exc_info:
        check_version(3, 2)
    error = exc_info.value
    assert error.current_version == 3
    assert error.provided_version == 2
    assert error.details == {"currentVersion": 3, "providedVersion": 2}
    assert "Version" in error.message


def test_future_version_also_conflicts():
    with pytest.raises(VersionConflict):
        check_version(0, 5)
