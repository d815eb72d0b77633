import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle


def _outline_moves(ax, moves, color, linewidth=2):
    for r, c in moves:
        ax.add_patch(
            Rectangle(
                (c - 0.5, r - 0.5),
                1,
                1,
                edgecolor=color,
                facecolor="none",
                linewidth=linewidth,
            )
        )


def _draw_state(ax, state, title, cmap):
    rows, cols = state.shape
    im = ax.imshow(state.astype(float), cmap=cmap, vmin=0.0, vmax=1.0)
    ax.set_xticks(range(cols))
    ax.set_yticks(range(rows))
    ax.set_xlabel("col")
    ax.set_ylabel("row")
    ax.set_title(title)
    return im


def show_plan_heatmap(
    state,
    plan,
    ax=None,
    pressed_color="red",
    title="Locked cells",
    cmap="Greys",
):
    """
    Show a grid state (1 = locked) with the cells of a toggle plan outlined.

    Parameters
    ----------
    state : array-like of bool, shape (rows, cols)
    plan : iterable of (row, col)
        Toggles to highlight. A cell toggled twice is outlined once.
    """
    state = np.asarray(state, dtype=bool)
    if ax is None:
        _, ax = plt.subplots(figsize=(3.5, 3.5))
    _draw_state(ax, state, title, cmap)
    _outline_moves(ax, sorted(set(map(tuple, plan))), pressed_color)
    return ax


def show_before_after(
    before,
    after,
    plan,
    pressed_color="red",
    titles=("Before", "After"),
    cmap="Greys",
):
    """Side-by-side view of the state before and after applying the plan."""
    before = np.asarray(before, dtype=bool)
    after = np.asarray(after, dtype=bool)
    fig, axes = plt.subplots(1, 2, figsize=(7.2, 3.5), constrained_layout=True)
    show_plan_heatmap(
        before, plan, ax=axes[0], pressed_color=pressed_color,
        title=titles[0], cmap=cmap,
    )
    _draw_state(axes[1], after, titles[1], cmap)
    return fig, axes
