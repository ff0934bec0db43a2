"""Unit test configuration.

Unit tests use in-memory SQLite and mocked HTTP; no external services.
"""

import pytest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Mark every test under this directory as a unit test."""
    for item in items:
        if "/tests/unit/" in str(item.path):
            item.add_marker(pytest.mark.unit)
