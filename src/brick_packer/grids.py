from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from .types import Cell, Dims, Placement

SIZE = 5
NUM_CELLS = SIZE**3
FULL_MASK = (1 << NUM_CELLS) - 1

# The boundary set may hold cells one step outside the cube, so it lives in a
# padded [-1, SIZE]^3 index space.
PADDED = SIZE + 2

_FACE_OFFSETS: tuple[Cell, ...] = (
    (-1, 0, 0),
    (1, 0, 0),
    (0, -1, 0),
    (0, 1, 0),
    (0, 0, -1),
    (0, 0, 1),
)

ALL_CELLS: list[Cell] = [
    (x, y, z) for x in range(SIZE) for y in range(SIZE) for z in range(SIZE)
]
assert len(ALL_CELLS) == NUM_CELLS


def in_bounds(cell: Cell) -> bool:
    return all(0 <= c < SIZE for c in cell)


def cell_index(cell: Cell) -> int:
    """Raster index x*25 + y*5 + z of an in-cube cell."""
    x, y, z = cell
    if not in_bounds(cell):
        raise ValueError(f"Cell out of bounds: {cell}")
    return x * SIZE * SIZE + y * SIZE + z


def cell_bit(cell: Cell) -> int:
    return 1 << cell_index(cell)


def padded_bit(cell: Cell) -> int:
    x, y, z = cell
    if not all(-1 <= c <= SIZE for c in cell):
        raise ValueError(f"Cell outside the padded cube: {cell}")
    return 1 << ((x + 1) * PADDED * PADDED + (y + 1) * PADDED + (z + 1))


def mask_from_cells(cells: Iterable[Cell]) -> int:
    mask = 0
    for cell in cells:
        mask |= cell_bit(cell)
    return mask


def cells_from_mask(mask: int) -> set[Cell]:
    return {cell for i, cell in enumerate(ALL_CELLS) if mask >> i & 1}


def padded_cells_from_mask(mask: int) -> set[Cell]:
    cells: set[Cell] = set()
    while mask:
        low = mask & -mask
        i = low.bit_length() - 1
        px, rest = divmod(i, PADDED * PADDED)
        py, pz = divmod(rest, PADDED)
        cells.add((px - 1, py - 1, pz - 1))
        mask ^= low
    return cells


def face_neighbors(cell: Cell) -> list[Cell]:
    x, y, z = cell
    return [(x + dx, y + dy, z + dz) for (dx, dy, dz) in _FACE_OFFSETS]


def box_cells(dims: Dims, anchor: Cell) -> list[Cell]:
    return Placement(dims, anchor).cells()


def empty_grid() -> np.ndarray:
    return np.zeros((SIZE, SIZE, SIZE), dtype=bool)


def grid_from_cells(cells: Iterable[Cell]) -> np.ndarray:
    """Return a 5x5x5 boolean grid indexed as grid[x, y, z]."""
    grid = empty_grid()
    for cell in cells:
        if not in_bounds(cell):
            raise ValueError(f"Cell out of bounds: {cell}")
        grid[cell] = True
    return grid


def grid_to_cells(grid: np.ndarray) -> set[Cell]:
    if grid.shape != (SIZE, SIZE, SIZE):
        raise ValueError(f"grid must be {SIZE}x{SIZE}x{SIZE}, got {grid.shape}")
    return {(int(x), int(y), int(z)) for x, y, z in np.argwhere(grid)}


def grid_from_mask(mask: int) -> np.ndarray:
    raw = np.frombuffer(mask.to_bytes(16, "little"), dtype=np.uint8)
    bits = np.unpackbits(raw, bitorder="little")[:NUM_CELLS]
    return bits.astype(bool).reshape(SIZE, SIZE, SIZE)


def mask_from_grid(grid: np.ndarray) -> int:
    if grid.shape != (SIZE, SIZE, SIZE):
        raise ValueError(f"grid must be {SIZE}x{SIZE}x{SIZE}, got {grid.shape}")
    packed = np.packbits(grid.ravel().astype(bool), bitorder="little")
    return int.from_bytes(packed.tobytes(), "little")


@dataclass(frozen=True)
class BoxSlot:
    """One way to put a box of fixed dims into the cube."""

    anchor: Cell
    mask: int
    padded_mask: int
    halo: int


@lru_cache(maxsize=None)
def box_slots(dims: Dims) -> tuple[BoxSlot, ...]:
    """All in-cube anchors for `dims`, in raster order, with precomputed masks."""
    sx, sy, sz = dims
    slots: list[BoxSlot] = []
    for anchor in ALL_CELLS:
        x0, y0, z0 = anchor
        if x0 + sx > SIZE or y0 + sy > SIZE or z0 + sz > SIZE:
            continue
        mask = 0
        padded_mask = 0
        halo = 0
        for cell in box_cells(dims, anchor):
            mask |= cell_bit(cell)
            padded_mask |= padded_bit(cell)
            for nb in face_neighbors(cell):
                halo |= padded_bit(nb)
        slots.append(BoxSlot(anchor, mask, padded_mask, halo))
    return tuple(slots)


@lru_cache(maxsize=None)
def _slots_by_anchor(dims: Dims) -> dict[Cell, BoxSlot]:
    return {slot.anchor: slot for slot in box_slots(dims)}


def box_slot(dims: Dims, anchor: Cell) -> BoxSlot | None:
    """The precomputed slot for `dims` at `anchor`, or None if it leaves the cube."""
    return _slots_by_anchor(tuple(dims)).get(tuple(anchor))
