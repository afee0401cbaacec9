from __future__ import annotations

from collections.abc import Sequence

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.colors import ListedColormap

from .grids import SIZE
from .plotting import qualitative_palette
from .state import packing_labels
from .types import Placement


def plot_layer(
    layer: np.ndarray,
    *,
    ax: plt.Axes,
    title: str,
    n_bricks: int,
    empty_color: str = "#ffffff",
) -> None:
    """Plot one z-layer of a label grid (0 = empty, i = brick i) as a heatmap."""
    cmap = ListedColormap([empty_color, *qualitative_palette(max(6, n_bricks))[:n_bricks]])
    sns.heatmap(
        layer.T,
        ax=ax,
        cmap=cmap,
        vmin=0,
        vmax=max(1, n_bricks),
        cbar=False,
        square=True,
        annot=True,
        fmt="d",
        linewidths=0.8,
        linecolor="#cccccc",
        xticklabels=False,
        yticklabels=False,
    )
    ax.set_title(title)
    ax.set_aspect("equal")
    ax.set_xlabel("")
    ax.set_ylabel("")


def layers_figure(placements: Sequence[Placement]) -> plt.Figure:
    sns.set_theme(style="white")
    labels = packing_labels(placements)

    fig, axes = plt.subplots(nrows=1, ncols=SIZE, figsize=(3.2 * SIZE, 3.4))
    for z, ax in enumerate(np.ravel(axes)):
        plot_layer(labels[:, :, z], ax=ax, title=f"z = {z}", n_bricks=len(placements))

    fig.tight_layout()
    return fig


def demo_layers(placements: Sequence[Placement]) -> None:
    layers_figure(placements)
    plt.show()
