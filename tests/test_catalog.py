"""
Tests for brick_packer.catalog and the BrickClass / Placement value types.
"""

from __future__ import annotations

import pytest

from brick_packer.catalog import (
    BIG,
    FLAT,
    PIXEL,
    Catalog,
    CatalogExhaustedError,
    brick_class,
    orientations,
    standard_catalog,
)
from brick_packer.types import BrickClass, Placement


def test_orientations_match_reference_variant_lists():
    assert orientations((3, 2, 2)) == ((3, 2, 2), (2, 3, 2), (2, 2, 3))
    assert orientations((1, 2, 4)) == (
        (1, 2, 4),
        (1, 4, 2),
        (2, 1, 4),
        (2, 4, 1),
        (4, 1, 2),
        (4, 2, 1),
    )
    assert orientations((1, 1, 1)) == ((1, 1, 1),)


def test_standard_catalog_layout():
    catalog = standard_catalog()
    assert len(catalog) == 17
    assert catalog.volume == 125
    catalog.check_volume()

    for depth in range(6):
        assert catalog.at(depth) == BIG
    for depth in range(6, 12):
        assert catalog.at(depth) == FLAT
    for depth in range(12, 17):
        assert catalog.at(depth) == PIXEL


def test_catalog_at_past_end_is_fatal():
    catalog = standard_catalog()
    with pytest.raises(CatalogExhaustedError):
        catalog.at(17)
    with pytest.raises(ValueError):
        catalog.at(-1)


def test_check_volume_rejects_mismatch():
    catalog = Catalog.from_counts([(BIG, 6), (FLAT, 6), (PIXEL, 4)])
    with pytest.raises(ValueError):
        catalog.check_volume()


def test_groups_merge_consecutive_classes():
    groups = standard_catalog().groups()
    assert [(b.name, n) for b, n in groups] == [("big", 6), ("flat", 6), ("pixel", 5)]


def test_catalog_rejects_bricks_larger_than_cube():
    with pytest.raises(ValueError):
        Catalog((brick_class("long", (6, 1, 1)),))


def test_brick_class_validation():
    with pytest.raises(ValueError):
        BrickClass("empty", ())
    with pytest.raises(ValueError):
        BrickClass("mixed", ((1, 1, 1), (1, 1, 2)))
    with pytest.raises(ValueError):
        BrickClass("zero", ((0, 1, 1),))
    assert BIG.volume == 12
    assert FLAT.volume == 8


def test_placement_cells_and_volume():
    p = Placement((3, 2, 2), (1, 0, 2))
    cells = p.cells()
    assert len(cells) == p.volume == 12
    assert min(cells) == (1, 0, 2)
    assert max(cells) == (3, 1, 3)
    assert str(p) == "3x2x2 @ (1, 0, 2)"
