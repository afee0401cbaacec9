"""Symmetry-invariant fingerprints of 5x5x5 occupancy grids.

A grid is hashed by packing its cells into an int (bit ``x*25 + y*5 + z``).
The canonical fingerprint is the minimum of those hashes over every
orientation of the grid under the cube's symmetry group (24 rotations, each
with and without a reflection), so congruent patterns share a fingerprint.
"""

from collections.abc import Iterator
from itertools import permutations

import numpy as np

from .grids import NUM_CELLS, SIZE, grid_from_mask, mask_from_grid

_AXIS_PERMUTATIONS: list[tuple[int, int, int]] = list(permutations((0, 1, 2)))


def _check_grid(grid: np.ndarray) -> np.ndarray:
    arr = np.asarray(grid)
    if arr.shape != (SIZE, SIZE, SIZE):
        raise ValueError(f"grid must be {SIZE}x{SIZE}x{SIZE}, got {arr.shape}")
    return arr


def orientations_of(grid: np.ndarray) -> Iterator[np.ndarray]:
    """Yield the grid under 6 axis permutations x 16 rotations x (id + 3 flips).

    The 384 results cover each of the 48 cube symmetries several times.
    """
    grid = _check_grid(grid)
    for perm in _AXIS_PERMUTATIONS:
        g = np.transpose(grid, perm)
        for _ in range(4):
            for _ in range(4):
                yield g
                for axis in range(3):
                    yield np.flip(g, axis)
                # about axis 1
                g = np.rot90(g, 1, axes=(0, 2))
            # about axis 0
            g = np.rot90(g, 1, axes=(1, 2))


def grid_hash(grid: np.ndarray) -> int:
    return mask_from_grid(_check_grid(grid).astype(bool))


def orientation_hashes(grid: np.ndarray) -> set[int]:
    return {grid_hash(g) for g in orientations_of(grid)}


def _build_table() -> np.ndarray:
    index = np.arange(NUM_CELLS).reshape(SIZE, SIZE, SIZE)
    rows = dict.fromkeys(tuple(g.ravel().tolist()) for g in orientations_of(index))
    table = np.array(list(rows), dtype=np.intp)
    table.setflags(write=False)
    return table


# Row r maps destination raster position -> source raster position.
_TABLE = _build_table()
assert _TABLE.shape == (48, NUM_CELLS)


def symmetry_table() -> np.ndarray:
    return _TABLE


def _min_packed(bits: np.ndarray) -> int:
    packed = np.packbits(bits[_TABLE], axis=1, bitorder="little")
    return min(int.from_bytes(row.tobytes(), "little") for row in packed)


def canonical_fingerprint(grid: np.ndarray) -> int:
    """Minimum hash over all 48 orientations of `grid`.

    Equal to ``min(orientation_hashes(grid))``.
    """
    return _min_packed(_check_grid(grid).astype(bool).ravel())


def mask_fingerprint(mask: int) -> int:
    return _min_packed(grid_from_mask(mask).ravel())
