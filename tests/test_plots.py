"""Tests for timeline plotting."""

import matplotlib.pyplot as plt
import pytest

from framesim.core.config import Settings
from framesim.simulation.runner import SimulationRunner
from framesim.viz.plots import nice_tick_interval, plot_sweep, plot_timeline, timeline_ticks


@pytest.fixture
def runner():
    return SimulationRunner(settings=Settings(), log_fn=lambda msg: None)


class TestTickInterval:
    """Tests for axis tick selection."""

    @pytest.mark.parametrize("span,expected", [
        (20.0, 2.0),
        (40.0, 5.0),
        (80.0, 10.0),
        (0.3, 0.05),
        (1000.0, 100.0),
    ])
    def test_round_intervals(self, span, expected):
        """Interval is a 1/2/5/10 multiple of a power of ten."""
        assert nice_tick_interval(span) == pytest.approx(expected)

    def test_empty_axis(self):
        """Zero span falls back to 1 ms."""
        assert nice_tick_interval(0.0) == 1.0

    def test_ticks_include_end(self):
        """Ticks run from zero to the span inclusive."""
        ticks = timeline_ticks(20.0)
        assert len(ticks) == 11
        assert ticks[0] == 0.0
        assert ticks[-1] == pytest.approx(20.0)


class TestPlots:
    """Smoke tests for figure creation."""

    def test_timeline(self, runner, gpu_bound_params, tmp_path):
        """Timeline has CPU and GPU lanes and saves to disk."""
        result = runner.run(gpu_bound_params)
        path = tmp_path / "timeline.png"

        fig = plot_timeline(result, save_path=path)

        assert len(fig.axes) == 2
        assert path.exists()
        plt.close(fig)

    def test_timeline_with_frames_ahead_waits(self, runner, depth_bound_params):
        """Wait bars are drawn on the CPU lane."""
        result = runner.run(depth_bound_params)
        fig = plot_timeline(result)
        cpu_ax = fig.axes[0]
        # Per frame: script + render, plus one wait for every frame after the first
        assert len(cpu_ax.collections) == 2 * 6 + 5
        plt.close(fig)

    def test_timeline_frame_start_labels(self, runner, depth_bound_params):
        """Each frame is labelled where its CPU work begins, wait included."""
        result = runner.run(depth_bound_params)
        fig = plot_timeline(result)
        labels = {t.get_text(): t.get_position()[0] for t in fig.axes[0].texts}
        assert labels["Frame 0"] == 0
        assert labels["Frame 1"] == pytest.approx(result.frames[0].render_end)
        plt.close(fig)

    def test_sweep(self, runner, cpu_bound_params, tmp_path):
        """Sweep plot has one line per measure."""
        points = runner.run_sweep("processing_factor", [0.01, 0.02, 0.04], params=cpu_bound_params)
        path = tmp_path / "sweep.png"

        fig = plot_sweep(points, "processing_factor", save_path=path)

        assert len(fig.axes[0].lines) == 2
        assert path.exists()
        plt.close(fig)
