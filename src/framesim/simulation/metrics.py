"""Derive summary observables from a simulated frame sequence."""

import math
from collections.abc import Sequence

from framesim.core.constants import MIN_FRAMES_FOR_METRICS, MS_PER_SECOND
from framesim.models.frame import FrameRecord
from framesim.models.metrics import Bottleneck, Observables
from framesim.models.parameters import SimulationParameters


def classify_bottleneck(last: FrameRecord, params: SimulationParameters) -> Bottleneck:
    """Diagnose what limited the given frame.

    Waits take priority (buffer first, then pipeline depth). Without
    waits, the larger of CPU and GPU cost decides, and a CPU-bound frame
    is split by whether scripts or command generation dominate.
    """
    if last.wait_buffer > 0:
        return Bottleneck.BUFFER
    if last.wait_frames_ahead > 0:
        return Bottleneck.PIPELINE_DEPTH
    if params.cpu_cost > params.gpu_cost:
        if params.script_time >= params.generation_cost:
            return Bottleneck.SCRIPT
        return Bottleneck.RENDER
    return Bottleneck.GPU


def derive_metrics(
    frames: Sequence[FrameRecord],
    params: SimulationParameters,
) -> Observables:
    """Compute frame time, FPS, bottleneck, buffer and latency figures.

    Args:
        frames: Output of :func:`framesim.simulation.engine.simulate`.
        params: Parameters the frames were simulated with.

    Returns:
        Observables for the run.

    Raises:
        ValueError: If fewer than two frames are given.
    """
    if len(frames) < MIN_FRAMES_FOR_METRICS:
        raise ValueError(
            f"At least {MIN_FRAMES_FOR_METRICS} frames are needed, got {len(frames)}"
        )

    last = frames[-1]
    prev = frames[-2]

    frame_time = last.gpu_end - prev.gpu_end
    fps = MS_PER_SECOND / frame_time if frame_time > 0 else math.inf

    return Observables(
        frame_time=frame_time,
        fps=fps,
        bottleneck=classify_bottleneck(last, params),
        peak_buffer_occupancy=max(f.buffer_use for f in frames),
        buffer_capacity=params.buffer_capacity,
        frames_in_flight=sum(1 for f in frames if f.gpu_end > last.render_end),
        max_frames_ahead=params.max_frames_ahead,
        input_latency=last.latency,
    )
