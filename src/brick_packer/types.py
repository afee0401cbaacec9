from dataclasses import dataclass

Cell = tuple[int, int, int]
Dims = tuple[int, int, int]


@dataclass(frozen=True)
class Placement:
    dims: Dims
    anchor: Cell

    def __post_init__(self) -> None:
        if len(self.dims) != 3 or any(int(d) <= 0 for d in self.dims):
            raise ValueError(f"Placement dims must be 3 positive ints: {self.dims}")
        if len(self.anchor) != 3:
            raise ValueError(f"Placement anchor must be a 3-tuple: {self.anchor}")

    @property
    def volume(self) -> int:
        sx, sy, sz = self.dims
        return sx * sy * sz

    def cells(self) -> list[Cell]:
        """All cells covered by the box, in raster order."""
        x0, y0, z0 = self.anchor
        sx, sy, sz = self.dims
        return [
            (x0 + dx, y0 + dy, z0 + dz)
            for dx in range(sx)
            for dy in range(sy)
            for dz in range(sz)
        ]

    def __str__(self) -> str:
        return f"{self.dims[0]}x{self.dims[1]}x{self.dims[2]} @ {self.anchor}"


@dataclass(frozen=True)
class BrickClass:
    name: str
    variants: tuple[Dims, ...]

    def __post_init__(self) -> None:
        if not self.variants:
            raise ValueError(f"Brick {self.name}: variants must be non-empty")
        volumes = set()
        for dims in self.variants:
            if len(dims) != 3 or any(int(d) <= 0 for d in dims):
                raise ValueError(
                    f"Brick {self.name}: dims must be 3 positive ints, got {dims}"
                )
            volumes.add(dims[0] * dims[1] * dims[2])
        if len(volumes) != 1:
            raise ValueError(
                f"Brick {self.name}: variants must share one volume, got {sorted(volumes)}"
            )

    @property
    def volume(self) -> int:
        sx, sy, sz = self.variants[0]
        return sx * sy * sz
