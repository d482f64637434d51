"""Plotting functions for simulated frame timelines."""

from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from framesim.core.config import PlotSettings
from framesim.core.constants import TARGET_TICKS, TICK_MULTIPLIERS
from framesim.core.types import TimeSeries, to_time_series
from framesim.simulation.runner import SimulationResult, SweepPoint

# Bar colours by stage
COLORS = {
    "wait": "#b0b0b0",
    "script": "#4c72b0",
    "render": "#dd8452",
    "gpu": "#55a868",
    "idle": "#e0e0e0",
}

BAR_HEIGHT = 0.8


def nice_tick_interval(span: float, target_ticks: int = TARGET_TICKS) -> float:
    """Pick a round axis tick interval giving roughly ``target_ticks`` ticks.

    The interval is 1, 2, 5 or 10 times a power of ten, whichever is
    closest to ``span / target_ticks``.

    Args:
        span: Axis length (ms).
        target_ticks: Desired number of ticks.

    Returns:
        Tick interval (ms). 1.0 for an empty axis.
    """
    if span <= 0 or target_ticks <= 0:
        return 1.0

    rough = span / target_ticks
    magnitude = 10.0 ** np.floor(np.log10(rough))
    candidates = magnitude * np.asarray(TICK_MULTIPLIERS, dtype=np.float64)
    return float(candidates[np.argmin(np.abs(candidates - rough))])


def timeline_ticks(span: float, target_ticks: int = TARGET_TICKS) -> TimeSeries:
    """Tick positions from 0 up to and including ``span``."""
    interval = nice_tick_interval(span, target_ticks)
    # Tolerance keeps a tick that lands exactly on span
    return np.arange(0.0, span + interval * 1e-9, interval)


def _tick_label(time: float, interval: float) -> str:
    decimals = 2 if interval < 1 else 1 if interval < 10 else 0
    return f"{time:.{decimals}f} ms"


def _bar(ax: Axes, start: float, end: float, row: int, kind: str, label: str | None = None):
    ax.broken_barh(
        [(start, max(end - start, 0.0))],
        (row - BAR_HEIGHT / 2, BAR_HEIGHT),
        facecolors=COLORS[kind],
        edgecolor="white",
        linewidth=0.5,
        label=label,
    )


def plot_timeline(
    result: SimulationResult,
    settings: PlotSettings | None = None,
    save_path: Path | None = None,
) -> Figure:
    """Plot CPU and GPU lanes of a simulated frame window.

    Args:
        result: Simulation result with frame records.
        settings: Plot configuration. Defaults to PlotSettings().
        save_path: Optional path to save figure.

    Returns:
        Matplotlib figure.
    """
    settings = settings or PlotSettings()
    fig, (cpu_ax, gpu_ax) = plt.subplots(
        2, 1,
        figsize=(settings.fig_width, settings.fig_height),
        sharex=True,
    )

    seen: set[str] = set()

    def once(name: str) -> str | None:
        # Legend entry only for the first bar of each kind
        if name in seen:
            return None
        seen.add(name)
        return name

    for frame in result.frames:
        row = frame.index
        if frame.wait_frames_ahead > 0:
            end = frame.wait_frames_ahead_start + frame.wait_frames_ahead
            _bar(cpu_ax, frame.wait_frames_ahead_start, end, row, "wait", once("CPU wait"))
        if frame.wait_buffer > 0:
            end = frame.wait_buffer_start + frame.wait_buffer
            _bar(cpu_ax, frame.wait_buffer_start, end, row, "wait", once("CPU wait"))
        _bar(cpu_ax, frame.script_start, frame.script_end, row, "script", once("Scripts"))
        _bar(cpu_ax, frame.render_start, frame.render_end, row, "render", once("Render thread"))

        if frame.gpu_idle > 0:
            _bar(gpu_ax, frame.gpu_start - frame.gpu_idle, frame.gpu_start, row, "idle", once("GPU idle"))
        if frame.gpu_wait > 0:
            _bar(gpu_ax, frame.gpu_start - frame.gpu_wait, frame.gpu_start, row, "wait", once("Queued"))
        _bar(gpu_ax, frame.gpu_start, frame.gpu_end, row, "gpu", once("GPU execution"))

    # Frame start markers
    for frame in result.frames:
        cpu_ax.axvline(frame.cpu_start, color="k", linewidth=0.5, alpha=0.2)
        cpu_ax.text(
            frame.cpu_start, frame.index - BAR_HEIGHT / 2, f"Frame {frame.index}",
            fontsize=7, va="bottom",
        )

    # Present markers
    presents = to_time_series([f.gpu_end for f in result.frames])
    gpu_ax.vlines(presents, -0.5, len(result.frames) - 0.5, colors="k", linewidth=0.5, alpha=0.4)

    span = result.end_time
    ticks = timeline_ticks(span, settings.target_ticks)
    interval = nice_tick_interval(span, settings.target_ticks)
    for ax, title in ((cpu_ax, "CPU"), (gpu_ax, "GPU")):
        ax.set_ylabel(title)
        ax.set_yticks(range(len(result.frames)))
        ax.set_yticklabels([f"Frame {f.index}" for f in result.frames])
        ax.invert_yaxis()
        ax.grid(True, axis="x", alpha=0.3)
    gpu_ax.set_xticks(ticks)
    gpu_ax.set_xticklabels([_tick_label(t, interval) for t in ticks])
    gpu_ax.set_xlim(0, span if span > 0 else 1.0)

    obs = result.observables
    cpu_ax.set_title(
        f"Frame time {obs.frame_time:.2f} ms ({obs.fps:.1f} FPS), "
        f"bottleneck: {obs.bottleneck.label}"
    )
    fig.legend(loc="upper right", fontsize=8)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=settings.dpi, bbox_inches="tight")

    return fig


def plot_sweep(
    points: Sequence[SweepPoint],
    parameter: str,
    save_path: Path | None = None,
) -> Figure:
    """Plot frame time and input latency against a swept parameter.

    Args:
        points: Output of SimulationRunner.run_sweep().
        parameter: Name of the swept parameter (axis label).
        save_path: Optional path to save figure.

    Returns:
        Matplotlib figure.
    """
    fig, ax = plt.subplots(figsize=(10, 6))

    values = np.array([p.value for p in points])
    frame_times = np.array([p.observables.frame_time for p in points])
    latencies = np.array([p.observables.input_latency for p in points])

    ax.plot(values, frame_times, "b-o", linewidth=2, markersize=4, label="Frame time")
    ax.plot(values, latencies, "r-s", linewidth=2, markersize=4, label="Input latency")

    ax.set_xlabel(parameter)
    ax.set_ylabel("Time (ms)")
    ax.set_title(f"Frame Time and Latency vs {parameter}")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")

    return fig
