"""
plotting.py
Gantt chart rendering for a SimulationResult (matplotlib).
"""
import logging

import matplotlib.pyplot as plt

from .models import PALETTE

log = logging.getLogger(__name__)


def merge_segments(timeline):
    """Merge adjacent entries of the same process for drawing."""
    merged = []
    for e in timeline:
        if merged and merged[-1][0] == e.name and merged[-1][2] == e.start:
            merged[-1] = (e.name, merged[-1][1], e.end)
        else:
            merged.append((e.name, e.start, e.end))
    return merged


def plot_gantt(result, title=None, savefile=None, show=True, dpi=150):
    """
    Draw one lane per process, in report (arrival) order, top to bottom.
    Returns the matplotlib Figure, or None when there is nothing to draw.
    """
    title = title or f"{result.algorithm} Gantt"
    if not result.timeline:
        print(f"[plot] Nothing to plot for: {title}")
        return None
    merged = merge_segments(result.timeline)
    names = [p.name for p in result.processes]
    y_positions = {name: i for i, name in enumerate(names[::-1])}
    fig_height = max(2, 0.5 * len(names) + 1)
    fig, ax = plt.subplots(figsize=(10, fig_height), dpi=dpi)
    for name, s, e in merged:
        y = y_positions[name]
        color = result.colors.get(name, PALETTE[0])
        ax.broken_barh([(s, e - s)], (y - 0.4, 0.8), facecolors=color, edgecolor='black')
        ax.text((s + e) / 2, y, name, ha='center', va='center', color='white')
    ax.set_yticks(list(y_positions.values()))
    ax.set_yticklabels(list(y_positions.keys()))
    ticks = sorted({t for _, s, e in merged for t in (s, e)})
    ax.set_xticks(ticks)
    ax.set_xlabel("Time")
    ax.set_title(title)
    ax.grid(True, axis='x', linestyle='--', alpha=0.4)
    fig.tight_layout()
    if savefile:
        fig.savefig(savefile, bbox_inches='tight', dpi=dpi)
        log.info("saved Gantt chart to %s", savefile)
        print(f"[plot] Saved: {savefile}")
    if show:
        plt.show()
    return fig
