"""Matplotlib drawing of the table, the philosophers and their forks."""

from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .agent import State
from .observers import Philosopher

COLORS = {
    State.THINKING: "#FFE066",  # yellow
    State.WAITING: "#E4572E",   # red
    State.EATING: "#76B041",    # green
}


def seat_positions(n: int, radius: float = 2.5):
    """x and y coordinates of n seats spread evenly around the table."""
    theta = np.linspace(0, 2 * np.pi, n, endpoint=False)
    return radius * np.cos(theta), radius * np.sin(theta)


def draw_table(
    philosophers: Sequence[Philosopher],
    fork_taken_by: List[Optional[int]],
    title: str = "Dining Philosophers",
):
    """
    Draws a circular table where philosophers are placed on a circle and forks are between them.
    fork_taken_by: fork index -> philosopher index, or None if free
    """
    n = len(philosophers)
    x, y = seat_positions(n)

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.set_xlim(-3.5, 3.5)
    ax.set_ylim(-3.5, 3.5)
    ax.set_aspect('equal')
    ax.axis('off')

    table = plt.Circle((0, 0), 1.2, color="#F5F0E1", zorder=0)
    ax.add_artist(table)

    # fork i lies between philosopher i and philosopher i+1
    for i, taker in enumerate(fork_taken_by):
        x1, y1 = x[i], y[i]
        xr, yr = x[(i + 1) % n], y[(i + 1) % n]
        fx, fy = (x1 + xr) / 2, (y1 + yr) / 2
        if taker is None:
            ax.plot([x1 * 0.85, xr * 0.85], [y1 * 0.85, yr * 0.85], linewidth=2, alpha=0.7)
            ax.scatter([fx], [fy], s=70, marker='|')
        else:
            # thick line from the fork toward whoever holds it
            tx, ty = x[taker], y[taker]
            ax.plot([fx, tx * 0.95], [fy, ty * 0.95], linewidth=4, alpha=0.9)
            ax.scatter([fx], [fy], s=120, marker='|')
            ax.text(fx, fy, f"{i}", fontsize=8, ha='center', va='center')

    for i, p in enumerate(philosophers):
        circ = plt.Circle((x[i], y[i]), 0.35, color=COLORS[p.state], ec="k", linewidth=0.7)
        ax.add_artist(circ)
        ax.text(x[i], y[i], f"P{i}\n{p.state.value}", ha='center', va='center', fontsize=8)
        ax.text(x[i], y[i] - 0.55, f"Eaten:{p.times_eaten}", ha='center', va='center', fontsize=7)

    ax.set_title(title)
    return fig
