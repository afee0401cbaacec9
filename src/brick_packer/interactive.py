from __future__ import annotations

from collections.abc import Sequence

import matplotlib.pyplot as plt
from matplotlib.widgets import Button, Slider

from .plotting import draw_packing
from .types import Placement


def interactive_packing_viewer(placements: Sequence[Placement]) -> None:
    """Step through a placement sequence brick by brick."""
    if not placements:
        raise ValueError("placements is empty")

    fig = plt.figure(figsize=(8, 8))
    ax3d = fig.add_axes((0.05, 0.18, 0.9, 0.78), projection="3d")

    ax_slider = fig.add_axes((0.20, 0.09, 0.60, 0.03))
    slider = Slider(
        ax_slider,
        "bricks",
        0,
        len(placements),
        valinit=len(placements),
        valstep=1,
    )

    ax_prev = fig.add_axes((0.20, 0.03, 0.08, 0.04))
    btn_prev = Button(ax_prev, "Prev")
    ax_next = fig.add_axes((0.30, 0.03, 0.08, 0.04))
    btn_next = Button(ax_next, "Next")

    ax_text = fig.add_axes((0.45, 0.02, 0.50, 0.06))
    ax_text.axis("off")
    status_text = ax_text.text(0.0, 0.5, "", va="center")

    def _render() -> None:
        n = int(slider.val)
        draw_packing(ax3d, placements[:n])
        last = f"last: {placements[n - 1]}" if n else "empty cube"
        status_text.set_text(f"{n}/{len(placements)} bricks, {last}")
        fig.canvas.draw_idle()

    def _on_slider(_val: float) -> None:
        _render()

    def _on_prev(_event) -> None:
        slider.set_val(max(slider.valmin, slider.val - 1))

    def _on_next(_event) -> None:
        slider.set_val(min(slider.valmax, slider.val + 1))

    slider.on_changed(_on_slider)
    btn_prev.on_clicked(_on_prev)
    btn_next.on_clicked(_on_next)

    _render()
    plt.show()
