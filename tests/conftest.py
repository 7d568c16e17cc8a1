"""Shared pytest configuration for the converter suites."""

from __future__ import annotations

import pytest

_SUITE_MARKERS = {
    "e2e_tests": pytest.mark.e2e,
    "integration_tests": pytest.mark.integration,
    "unit_tests": pytest.mark.unit,
}


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each test with the suite its file lives in."""
    del config
    for item in items:
        parts = set(item.path.parts)
        for directory, marker in _SUITE_MARKERS.items():
            if directory in parts:
                item.add_marker(marker)
                break
