"""Per-frame timing records produced by the simulator."""

from dataclasses import dataclass

from framesim.core.types import Milliseconds


@dataclass(frozen=True)
class ReleaseEvent:
    """Commands that leave the buffer once GPU processing reaches ``time``."""

    time: Milliseconds
    amount: int


@dataclass(frozen=True)
class FrameRecord:
    """Timestamps (ms) of every stage and wait for one simulated frame.

    Stages are causally chained: ``script_end == render_start`` and
    ``render_end <= gpu_start``. Wait start offsets are 0 when the wait is 0.
    """

    index: int

    # CPU waits before the frame can start
    wait_frames_ahead: Milliseconds
    wait_frames_ahead_start: Milliseconds
    wait_buffer: Milliseconds
    wait_buffer_start: Milliseconds

    # CPU stages
    script_start: Milliseconds
    script_end: Milliseconds
    render_start: Milliseconds
    render_end: Milliseconds

    # GPU stage
    gpu_start: Milliseconds
    gpu_end: Milliseconds
    gpu_duration: Milliseconds

    # GPU slack: at most one of these is non-zero
    gpu_idle: Milliseconds  # GPU free before the commands arrived
    gpu_wait: Milliseconds  # Commands arrived before the GPU was free

    # Buffer occupancy right after this frame's commands were enqueued
    buffer_use: int

    # Enqueued past capacity (only possible with OverflowPolicy.PROCEED)
    buffer_overflow: bool = False

    @property
    def cpu_start(self) -> Milliseconds:
        """When the CPU first started working on (or waiting for) this frame."""
        starts = [self.script_start]
        if self.wait_frames_ahead > 0:
            starts.append(self.wait_frames_ahead_start)
        if self.wait_buffer > 0:
            starts.append(self.wait_buffer_start)
        return min(starts)

    @property
    def latency(self) -> Milliseconds:
        """Script start to present."""
        return self.gpu_end - self.script_start
