from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from .catalog import Catalog
from .grids import (
    FULL_MASK,
    NUM_CELLS,
    SIZE,
    box_slot,
    box_slots,
    cells_from_mask,
    grid_from_mask,
    in_bounds,
    padded_bit,
    padded_cells_from_mask,
)
from .symmetry import mask_fingerprint
from .types import Cell, Dims, Placement

_SEED: Cell = (0, 0, 0)


@dataclass(frozen=True)
class State:
    """Snapshot of a partial packing.

    `free` is a bitset of unoccupied cells (bit x*25 + y*5 + z). `boundary`
    is a bitset over the padded cube [-1, 5]^3 holding every face neighbour
    of an occupied cell, plus the seed cell (0, 0, 0).
    """

    placements: tuple[Placement, ...] = ()
    free: int = FULL_MASK
    boundary: int = padded_bit(_SEED)

    @property
    def depth(self) -> int:
        return len(self.placements)

    @property
    def space_left(self) -> int:
        return self.free.bit_count()

    @property
    def is_solved(self) -> bool:
        return self.free == 0

    def free_cells(self) -> set[Cell]:
        return cells_from_mask(self.free)

    def boundary_cells(self) -> set[Cell]:
        """Boundary cells, including sentinels just outside the cube."""
        return padded_cells_from_mask(self.boundary)

    def occupancy(self) -> np.ndarray:
        return ~grid_from_mask(self.free)

    def fingerprint(self) -> int:
        return mask_fingerprint(self.free)

    def fits(self, dims: Dims, anchor: Cell) -> bool:
        slot = box_slot(dims, anchor)
        return slot is not None and self.free & slot.mask == slot.mask

    def touches_boundary(self, dims: Dims, anchor: Cell) -> bool:
        """Whether the box would cover a boundary cell. False if it leaves the cube."""
        slot = box_slot(dims, anchor)
        return slot is not None and bool(self.boundary & slot.padded_mask)

    def place(self, placement: Placement) -> "State":
        """Return a new state with `placement` applied."""
        slot = box_slot(placement.dims, placement.anchor)
        if slot is None or self.free & slot.mask != slot.mask:
            raise ValueError(f"Placement {placement} overlaps or leaves the cube")
        return State(
            placements=self.placements + (placement,),
            free=self.free & ~slot.mask,
            boundary=self.boundary | slot.halo,
        )


def initial_state() -> State:
    return State()


def iter_successors(
    state: State, catalog: Catalog, *, require_boundary_touch: bool = False
) -> Iterator[State]:
    """Children of `state` for every legal placement of the next brick.

    Variants are tried in catalog order, anchors in raster order. With
    `require_boundary_touch`, a box must cover at least one boundary cell.
    """
    brick = catalog.at(state.depth)
    free = state.free
    boundary = state.boundary
    placements = state.placements
    for dims in brick.variants:
        for slot in box_slots(dims):
            if free & slot.mask != slot.mask:
                continue
            if require_boundary_touch and not boundary & slot.padded_mask:
                continue
            yield State(
                placements=placements + (Placement(dims, slot.anchor),),
                free=free & ~slot.mask,
                boundary=boundary | slot.halo,
            )


def successors(
    state: State, catalog: Catalog, *, require_boundary_touch: bool = False
) -> list[State]:
    return list(
        iter_successors(
            state, catalog, require_boundary_touch=require_boundary_touch
        )
    )


def packing_labels(placements: Sequence[Placement]) -> np.ndarray:
    """Return a 5x5x5 int grid: 0 = empty, i + 1 = covered by placements[i]."""
    labels = np.zeros((SIZE, SIZE, SIZE), dtype=int)
    for i, p in enumerate(placements):
        for cell in p.cells():
            if not in_bounds(cell):
                raise ValueError(f"Placement {i} ({p}) leaves the cube at {cell}")
            if labels[cell]:
                raise ValueError(
                    f"Placement {i} ({p}) overlaps placement {labels[cell] - 1} at {cell}"
                )
            labels[cell] = i + 1
    return labels


def validate_packing(
    placements: Sequence[Placement], catalog: Catalog | None = None
) -> None:
    """Raise ValueError unless `placements` tile the cube exactly."""
    labels = packing_labels(placements)
    empty = int(np.count_nonzero(labels == 0))
    if empty:
        raise ValueError(f"Packing leaves {empty} of {NUM_CELLS} cells empty")
    if catalog is None:
        return
    if len(placements) != len(catalog):
        raise ValueError(
            f"Packing has {len(placements)} placements, catalog has {len(catalog)}"
        )
    for depth, p in enumerate(placements):
        brick = catalog.at(depth)
        if p.dims not in brick.variants:
            raise ValueError(
                f"Placement {depth} uses {p.dims}, not a variant of {brick.name}"
            )
