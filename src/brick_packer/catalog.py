from collections.abc import Iterable
from dataclasses import dataclass
from itertools import permutations

from .grids import NUM_CELLS, SIZE
from .types import BrickClass, Dims


class CatalogExhaustedError(RuntimeError):
    """Raised when a brick is requested for a depth past the end of the catalog."""


def orientations(dims: Dims) -> tuple[Dims, ...]:
    """Distinct axis-aligned orientations of a box, in permutation order."""
    out: list[Dims] = []
    for p in permutations(dims):
        d = (int(p[0]), int(p[1]), int(p[2]))
        if d not in out:
            out.append(d)
    return tuple(out)


def brick_class(name: str, dims: Dims) -> BrickClass:
    return BrickClass(name, orientations(dims))


@dataclass(frozen=True)
class Catalog:
    """Brick class to place at each search depth."""

    entries: tuple[BrickClass, ...]

    def __post_init__(self) -> None:
        for depth, entry in enumerate(self.entries):
            for dims in entry.variants:
                if any(d > SIZE for d in dims):
                    raise ValueError(
                        f"Catalog[{depth}] ({entry.name}): {dims} does not fit a {SIZE}-cube"
                    )

    @classmethod
    def from_counts(cls, items: Iterable[tuple[BrickClass, int]]) -> "Catalog":
        entries: list[BrickClass] = []
        for brick, count in items:
            if count < 0:
                raise ValueError(f"Brick {brick.name}: count must be >= 0")
            entries.extend([brick] * count)
        return cls(tuple(entries))

    def __len__(self) -> int:
        return len(self.entries)

    def at(self, depth: int) -> BrickClass:
        if depth < 0:
            raise ValueError(f"depth must be >= 0, got {depth}")
        if depth >= len(self.entries):
            raise CatalogExhaustedError(
                f"No brick for depth {depth}: catalog has {len(self.entries)} entries"
            )
        return self.entries[depth]

    @property
    def volume(self) -> int:
        return sum(entry.volume for entry in self.entries)

    def check_volume(self) -> None:
        if self.volume != NUM_CELLS:
            raise ValueError(
                f"Catalog covers {self.volume} cells, the cube has {NUM_CELLS}"
            )

    def groups(self) -> list[tuple[BrickClass, int]]:
        """Run-length view of the catalog: consecutive equal classes merged."""
        out: list[tuple[BrickClass, int]] = []
        for entry in self.entries:
            if out and out[-1][0] == entry:
                out[-1] = (entry, out[-1][1] + 1)
            else:
                out.append((entry, 1))
        return out


BIG = brick_class("big", (3, 2, 2))
FLAT = brick_class("flat", (1, 2, 4))
PIXEL = brick_class("pixel", (1, 1, 1))


def standard_catalog() -> Catalog:
    """6 x 3x2x2, then 6 x 1x2x4, then 5 x 1x1x1 (125 cells)."""
    return Catalog.from_counts([(BIG, 6), (FLAT, 6), (PIXEL, 5)])
