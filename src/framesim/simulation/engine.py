"""Discrete-event simulation of the CPU -> buffer -> GPU frame pipeline.

Per frame, in order:
1. Settle buffer releases due at the current CPU clock.
2. Frames-ahead gate: frame i may not start before frame
   ``i - max_frames_ahead`` has finished on the GPU.
3. Buffer gate: wait for releases until this frame's commands fit.
4. Script then command generation on the CPU.
5. Enqueue commands; the GPU runs frames serially in FIFO order.
6. The commands leave the buffer when the GPU starts on them.
"""

import logging

from framesim.core.config import OverflowPolicy, get_settings
from framesim.models.frame import FrameRecord
from framesim.models.parameters import SimulationParameters
from framesim.simulation.buffer import CommandBuffer

logger = logging.getLogger(__name__)


class BufferCapacityError(ValueError):
    """A frame's commands can never fit in the command buffer."""


def simulate(
    params: SimulationParameters,
    frame_count: int,
    overflow_policy: OverflowPolicy | None = None,
) -> list[FrameRecord]:
    """Simulate ``frame_count`` frames from a cold start.

    Args:
        params: Pipeline parameters.
        frame_count: Number of frames to simulate.
        overflow_policy: Handling of ``buffer_capacity < command_count``.
            Defaults to the configured policy.

    Returns:
        Frame records in index order.

    Raises:
        ValueError: If frame_count is negative or not an integer.
        BufferCapacityError: Under the strict policy, if the buffer cannot
            hold a single frame's commands.
    """
    if isinstance(frame_count, bool) or not isinstance(frame_count, int):
        raise ValueError(f"frame_count must be an integer, got {frame_count!r}")
    if frame_count < 0:
        raise ValueError(f"frame_count must be non-negative, got {frame_count}")

    if overflow_policy is None:
        overflow_policy = get_settings().simulation.overflow_policy

    if not params.has_valid_capacity and overflow_policy == OverflowPolicy.STRICT:
        raise BufferCapacityError(
            f"buffer_capacity ({params.buffer_capacity}) is smaller than "
            f"command_count ({params.command_count})"
        )

    commands = params.command_count
    render_duration = params.generation_cost
    gpu_duration = params.gpu_cost

    buffer = CommandBuffer(capacity=params.buffer_capacity)
    frames: list[FrameRecord] = []
    prev_render_end = 0.0
    prev_gpu_end = 0.0

    for i in range(frame_count):
        clock = prev_render_end
        buffer.settle(clock)

        wait_frames_ahead = 0.0
        wait_frames_ahead_start = 0.0
        if i >= params.max_frames_ahead:
            gate_time = frames[i - params.max_frames_ahead].gpu_end
            if gate_time > clock:
                wait_frames_ahead_start = clock
                wait_frames_ahead = gate_time - clock
                clock = gate_time
                buffer.settle(clock)

        buffer_wait_anchor = clock
        wait_buffer = 0.0
        overflow = False
        while buffer.would_overflow(commands):
            next_release = buffer.next_release_time()
            if next_release is None:
                overflow = True
                break
            wait_until = max(clock, next_release)
            wait_buffer += wait_until - clock
            clock = wait_until
            buffer.settle(clock)
        wait_buffer_start = buffer_wait_anchor if wait_buffer > 0 else 0.0

        script_start = clock
        script_end = script_start + params.script_time
        render_start = script_end
        render_end = render_start + render_duration

        buffer_use = buffer.enqueue(commands)
        if overflow:
            logger.warning(
                "Frame %d enqueued %d commands over capacity (%d/%d)",
                i, commands, buffer_use, buffer.capacity,
            )

        # Positive slack: GPU sat idle; negative: work queued behind the GPU
        slack = render_end - prev_gpu_end
        gpu_start = max(render_end, prev_gpu_end)
        gpu_end = gpu_start + gpu_duration

        buffer.schedule_release(gpu_start, commands)

        frames.append(FrameRecord(
            index=i,
            wait_frames_ahead=wait_frames_ahead,
            wait_frames_ahead_start=wait_frames_ahead_start,
            wait_buffer=wait_buffer,
            wait_buffer_start=wait_buffer_start,
            script_start=script_start,
            script_end=script_end,
            render_start=render_start,
            render_end=render_end,
            gpu_start=gpu_start,
            gpu_end=gpu_end,
            gpu_duration=gpu_duration,
            gpu_idle=max(0.0, slack),
            gpu_wait=max(0.0, -slack),
            buffer_use=buffer_use,
            buffer_overflow=overflow,
        ))
        logger.debug(
            "Frame %d: cpu %.3f-%.3f gpu %.3f-%.3f buffer %d",
            i, script_start, render_end, gpu_start, gpu_end, buffer_use,
        )

        prev_render_end = render_end
        prev_gpu_end = gpu_end

    return frames
