"""
Unit Test Layer Configuration

Pure logic only: models, cart operations, financials, validation, gate.

Usage:
    pytest tests/unit -v
"""
import pytest


def pytest_collection_modifyitems(items):
    for item in items:
        if "tests/unit" in str(item.path).replace("\\", "/"):
            item.add_marker(pytest.mark.unit)
