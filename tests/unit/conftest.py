from pathlib import Path

import pytest


def pytest_collection_modifyitems(items):
    """Automatically mark all tests under tests/unit as unit tests."""
    current_dir = Path(__file__).parent
    for item in items:
        if current_dir in Path(item.fspath).parents:
            item.add_marker(pytest.mark.unit)
