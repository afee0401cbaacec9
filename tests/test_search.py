"""
Tests for brick_packer.search

Small catalogs and partial packings keep these fast; full 17-brick runs
are marked slow.
"""

from __future__ import annotations

import pytest

from brick_packer.catalog import (
    PIXEL,
    Catalog,
    CatalogExhaustedError,
    brick_class,
    standard_catalog,
)
from brick_packer.search import PackingSearch, SearchStatus, solve
from brick_packer.state import initial_state, validate_packing
from brick_packer.types import Placement

SLAB = brick_class("slab", (5, 5, 1))


def _slab_catalog() -> Catalog:
    return Catalog.from_counts([(SLAB, 5)])


def test_slab_catalog_is_solved():
    catalog = _slab_catalog()
    result = solve(catalog, verbose=False)

    assert result.status is SearchStatus.SOLVED
    assert result.solved
    assert len(result.placements) == 5
    assert result.state.space_left == 0
    validate_packing(result.placements, catalog)


def test_unit_cube_catalog_is_solved():
    catalog = Catalog.from_counts([(PIXEL, 125)])
    result = solve(catalog, verbose=False)

    assert result.solved
    assert len(result.placements) == 125
    validate_packing(result.placements, catalog)


@pytest.mark.parametrize("pruning, expanded", [(True, 2), (False, 1 + 27)])
def test_unsolvable_catalog_ends_exhausted(pruning, expanded):
    cube3 = brick_class("cube3", (3, 3, 3))
    catalog = Catalog.from_counts([(cube3, 4), (PIXEL, 17)])
    catalog.check_volume()

    result = solve(catalog, require_boundary_touch=pruning, verbose=False)

    assert result.status is SearchStatus.EXHAUSTED
    assert not result.solved
    # Only one 3x3x3 brick fits; the best state reached holds it.
    assert result.state.space_left == 125 - 27
    assert result.stats.iterations == expanded


def test_short_catalog_raises_catalog_exhausted():
    catalog = Catalog.from_counts([(SLAB, 1)])
    with pytest.raises(CatalogExhaustedError):
        solve(catalog, verbose=False)


def test_first_step_pushes_every_pruned_child():
    search = PackingSearch(_slab_catalog(), require_boundary_touch=True, verbose=False)
    assert len(search) == 1

    status = search.step()

    assert status is SearchStatus.RUNNING
    assert search.stats.iterations == 1
    # One slab per orientation covers the seed cell.
    assert len(search) == 3
    assert len(search.seen) == 1


def test_seen_fingerprints_are_not_pushed_again():
    catalog = Catalog.from_counts([(PIXEL, 125)])
    search = PackingSearch(catalog, require_boundary_touch=True, verbose=False)
    only_child = initial_state().place(Placement((1, 1, 1), (0, 0, 0)))
    search.seen.add(only_child.fingerprint())

    status = search.step()

    assert search.stats.dedup_hits == 1
    assert len(search) == 0
    assert status is SearchStatus.EXHAUSTED


def test_search_prefers_fewest_free_cells():
    search = PackingSearch(_slab_catalog(), verbose=False)
    search.step()
    search.step()
    # The second pop is a child of the first, one slab deep.
    assert search.best.depth == 1
    assert search.best.space_left == 100


def test_step_after_termination_is_a_no_op():
    search = PackingSearch(_slab_catalog(), verbose=False)
    result = search.run()
    iterations = result.stats.iterations
    assert search.step() is SearchStatus.SOLVED
    assert search.stats.iterations == iterations


def test_progress_and_solution_are_printed(capsys):
    solve(_slab_catalog(), progress_every=1, verbose=True)
    out = capsys.readouterr().out
    assert "[search] iter=1 " in out
    assert "dedup_hits=" in out
    assert "Found solution!" in out
    assert "5x5x1 @ (0, 0, 0)" in out or "1x5x5 @ (0, 0, 0)" in out or "5x1x5 @ (0, 0, 0)" in out


def test_progress_every_must_be_positive():
    with pytest.raises(ValueError):
        PackingSearch(_slab_catalog(), progress_every=0)


@pytest.mark.parametrize("depth", [10, 12])
def test_search_completes_known_partial_packing(reference_placements, depth):
    catalog = standard_catalog()
    start = initial_state()
    for p in reference_placements[:depth]:
        start = start.place(p)

    result = solve(catalog, start=start, verbose=False)

    assert result.status is SearchStatus.SOLVED
    assert result.placements[:depth] == tuple(reference_placements[:depth])
    assert len(result.placements) == 17
    assert result.state.space_left == 0
    validate_packing(result.placements, catalog)


def test_start_state_is_expanded_first(reference_placements):
    start = initial_state()
    for p in reference_placements[:12]:
        start = start.place(p)
    search = PackingSearch(standard_catalog(), start=start, verbose=False)

    search.step()

    assert search.best is start
    # One pixel per free cell.
    assert len(search) == 5


@pytest.mark.slow
def test_standard_catalog_end_to_end():
    catalog = standard_catalog()
    result = solve(catalog, verbose=False)

    assert result.status is SearchStatus.SOLVED
    assert len(result.placements) == 17
    assert result.state.space_left == 0
    validate_packing(result.placements, catalog)


@pytest.mark.slow
def test_standard_catalog_with_boundary_pruning_is_exhausted():
    # Growing from the seed corner in catalog order never closes the cube.
    result = solve(standard_catalog(), require_boundary_touch=True, verbose=False)

    assert result.status is SearchStatus.EXHAUSTED
    assert result.state.space_left > 0
