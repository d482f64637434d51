"""Aggregate observables derived from a simulated frame sequence."""

from enum import Enum

from pydantic import BaseModel


class Bottleneck(str, Enum):
    """Which stage or resource limited the most recent frame."""

    BUFFER = "buffer-bound"
    PIPELINE_DEPTH = "pipeline-depth-bound"
    SCRIPT = "script-bound"
    RENDER = "render-bound"
    GPU = "GPU-bound"

    @property
    def label(self) -> str:
        """Short display name."""
        return _LABELS[self]


_LABELS = {
    Bottleneck.BUFFER: "Queue Full",
    Bottleneck.PIPELINE_DEPTH: "Frame Pipeline Limit",
    Bottleneck.SCRIPT: "CPU Scripts",
    Bottleneck.RENDER: "CPU Render",
    Bottleneck.GPU: "GPU",
}


class Observables(BaseModel):
    """Summary figures for one simulation run."""

    # Steady-state present interval (ms) and its rate
    frame_time: float
    fps: float

    bottleneck: Bottleneck

    # Buffer occupancy
    peak_buffer_occupancy: int
    buffer_capacity: int

    # Frames still on the GPU after the newest frame left the CPU
    frames_in_flight: int
    max_frames_ahead: int

    # Script start to present for the newest frame (ms)
    input_latency: float

    @property
    def buffer_utilization(self) -> float:
        """Peak occupancy as a fraction of capacity."""
        if self.buffer_capacity == 0:
            return 0.0
        return self.peak_buffer_occupancy / self.buffer_capacity
