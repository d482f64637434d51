"""Visualization tools for simulation results."""

from framesim.viz.plots import (
    nice_tick_interval,
    plot_sweep,
    plot_timeline,
    timeline_ticks,
)

__all__ = [
    "nice_tick_interval",
    "plot_sweep",
    "plot_timeline",
    "timeline_ticks",
]
