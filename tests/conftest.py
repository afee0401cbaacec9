"""
Shared fixtures for the brick_packer tests.

Full-size searches are marked `slow` and skipped unless pytest is run with
`--runslow`.
"""

from __future__ import annotations

import pytest

from brick_packer.types import Placement

# A known packing of the standard catalog, in catalog order.
_REFERENCE_SOLUTION = [
    ((3, 2, 2), (0, 3, 1)),
    ((3, 2, 2), (2, 0, 2)),
    ((2, 2, 3), (0, 1, 0)),
    ((2, 3, 2), (1, 2, 3)),
    ((2, 3, 2), (2, 0, 0)),
    ((2, 2, 3), (3, 2, 2)),
    ((1, 4, 2), (4, 0, 0)),
    ((1, 4, 2), (0, 1, 3)),
    ((2, 1, 4), (0, 0, 0)),
    ((2, 1, 4), (3, 4, 1)),
    ((4, 2, 1), (1, 0, 4)),
    ((4, 2, 1), (0, 3, 0)),
    ((1, 1, 1), (1, 1, 3)),
    ((1, 1, 1), (0, 0, 4)),
    ((1, 1, 1), (3, 3, 1)),
    ((1, 1, 1), (4, 4, 0)),
    ((1, 1, 1), (2, 2, 2)),
]


def pytest_addoption(parser):
    parser.addoption(
        "--runslow", action="store_true", default=False, help="run slow tests"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def reference_placements() -> list[Placement]:
    return [Placement(dims, anchor) for dims, anchor in _REFERENCE_SOLUTION]
