from collections.abc import Sequence

import numpy as np
import plotly.graph_objects as go

from .grids import SIZE
from .state import packing_labels
from .types import Placement

_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def qualitative_palette(n: int) -> list[str]:
    base = [
        "#636EFA",
        "#EF553B",
        "#00CC96",
        "#AB63FA",
        "#FFA15A",
        "#19D3F3",
        "#FF6692",
        "#B6E880",
        "#FF97FF",
        "#FECB52",
    ]
    if n <= len(base):
        return base[:n]
    return [base[i % len(base)] for i in range(n)]


def _label(i: int) -> str:
    return _LETTERS[i % len(_LETTERS)]


def format_packing(placements: Sequence[Placement]) -> str:
    """ASCII view of a (partial) packing, one block of rows per z-layer.

    Each brick is drawn with its letter (A = first placement), empty cells
    as '.'. Rows are y, columns are x.
    """
    labels = packing_labels(placements)
    blocks: list[str] = []
    for z in range(SIZE):
        rows = [f"z={z}"]
        for y in range(SIZE):
            rows.append(
                "".join(
                    _label(labels[x, y, z] - 1) if labels[x, y, z] else "."
                    for x in range(SIZE)
                )
            )
        blocks.append("\n".join(rows))
    return "\n\n".join(blocks)


def print_packing(placements: Sequence[Placement]) -> None:
    for i, p in enumerate(placements):
        print(f"{_label(i)}: {p}")
    print()
    print(format_packing(placements))


def _add_voxel_cube_to_mesh(
    *,
    x0: float,
    y0: float,
    z0: float,
    size: tuple[float, float, float],
    xs: list[float],
    ys: list[float],
    zs: list[float],
    ii: list[int],
    jj: list[int],
    kk: list[int],
) -> None:
    """Append a box (12 triangles) to a growing Mesh3d buffer."""
    base = len(xs)
    x1, y1, z1 = x0 + size[0], y0 + size[1], z0 + size[2]

    verts = [
        (x0, y0, z0),
        (x0, y1, z0),
        (x1, y1, z0),
        (x1, y0, z0),
        (x0, y0, z1),
        (x0, y1, z1),
        (x1, y1, z1),
        (x1, y0, z1),
    ]
    for x, y, z in verts:
        xs.append(x)
        ys.append(y)
        zs.append(z)

    # Same topology as the Plotly docs "Mesh Cube".
    i_loc = [7, 0, 0, 0, 4, 4, 6, 6, 4, 0, 3, 2]
    j_loc = [3, 4, 1, 2, 5, 6, 5, 2, 0, 1, 6, 3]
    k_loc = [0, 7, 2, 3, 6, 7, 1, 1, 5, 5, 7, 6]
    for a, b, c in zip(i_loc, j_loc, k_loc, strict=True):
        ii.append(base + a)
        jj.append(base + b)
        kk.append(base + c)


def plot_packing(
    placements: Sequence[Placement], *, title: str = "Cube packing"
) -> go.Figure:
    """Return a Plotly 3D figure with one mesh per placed brick."""
    packing_labels(placements)

    palette = qualitative_palette(max(6, len(placements)))
    inset = 0.03  # keeps neighbouring bricks visually separate

    data: list[object] = []
    for i, p in enumerate(placements):
        xs: list[float] = []
        ys: list[float] = []
        zs: list[float] = []
        ii: list[int] = []
        jj: list[int] = []
        kk: list[int] = []
        x0, y0, z0 = p.anchor
        _add_voxel_cube_to_mesh(
            x0=x0 + inset,
            y0=y0 + inset,
            z0=z0 + inset,
            size=tuple(float(d) - 2 * inset for d in p.dims),
            xs=xs,
            ys=ys,
            zs=zs,
            ii=ii,
            jj=jj,
            kk=kk,
        )
        name = f"{_label(i)} {p}"
        data.append(
            go.Mesh3d(
                x=xs,
                y=ys,
                z=zs,
                i=ii,
                j=jj,
                k=kk,
                color=palette[i],
                opacity=1.0,
                flatshading=True,
                name=name,
                hovertemplate=f"{name}<extra></extra>",
                showscale=False,
            )
        )

    fig = go.Figure(data=data)
    axis_range = [-0.25, SIZE + 0.25]
    fig.update_layout(
        title=title,
        margin=dict(l=10, r=10, t=50, b=10),
        height=600,
        scene=dict(
            xaxis=dict(range=axis_range, dtick=1, title="x"),
            yaxis=dict(range=axis_range, dtick=1, title="y"),
            zaxis=dict(range=axis_range, dtick=1, title="z"),
            aspectmode="cube",
        ),
        showlegend=True,
    )
    return fig


def draw_packing(ax, placements: Sequence[Placement]) -> None:
    """Draw a packing onto a matplotlib 3D axis using voxels."""
    labels = packing_labels(placements)
    palette = qualitative_palette(max(6, len(placements)))

    colors = np.empty(labels.shape, dtype=object)
    for i in range(len(placements)):
        colors[labels == i + 1] = palette[i]

    ax.clear()
    ax.voxels(labels > 0, facecolors=colors, edgecolor="#333333", linewidth=0.3)
    ax.set_xlim(0, SIZE)
    ax.set_ylim(0, SIZE)
    ax.set_zlim(0, SIZE)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    ax.set_box_aspect((1, 1, 1))
