"""Simulation orchestration and result handling."""

import json
import logging
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, SkipValidation

from framesim.core.config import OverflowPolicy, Settings, get_settings
from framesim.models.frame import FrameRecord
from framesim.models.metrics import Observables
from framesim.models.parameters import SimulationParameters
from framesim.simulation.engine import simulate
from framesim.simulation.metrics import derive_metrics

# Configure module logger
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


class SimulationResult(BaseModel):
    """Results from a simulation run."""

    parameters: SkipValidation[SimulationParameters]
    frame_count: int
    frames: list[FrameRecord]
    observables: Observables
    explanation: str

    @property
    def end_time(self) -> float:
        """Present time of the last frame (ms)."""
        return max((f.gpu_end for f in self.frames), default=0.0)

    def to_dict(self) -> dict:
        """Export to dictionary for JSON serialization."""
        return self.model_dump(mode="json")

    def save(self, path: Path) -> None:
        """Save results to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


class SweepPoint(BaseModel):
    """One run of a parameter sweep."""

    value: float
    parameters: SkipValidation[SimulationParameters]
    observables: Observables


def describe_parameters(params: SimulationParameters) -> str:
    """Plain-language summary of what the parameters mean for a frame."""
    text = [
        f"Scripts take {params.script_time:g} ms, generating {params.command_count} "
        f"commands in {params.generation_cost:.2f} ms on the CPU.",
        f"The GPU processes these commands in {params.gpu_cost:.2f} ms while the "
        f"command buffer can hold {params.buffer_capacity} commands "
        f"(minimum: {params.command_count}).",
        f"The CPU can work {params.max_frames_ahead} frames ahead; beyond that, "
        f"it waits for GPU completion or buffer space.",
    ]
    return " ".join(text)


@dataclass
class SimulationRunner:
    """Runs simulations with configured defaults.

    Every run starts from a cold pipeline; nothing carries over between runs.
    """

    settings: Settings = field(default_factory=get_settings)
    log_fn: Callable[[str], None] | None = None

    def __post_init__(self) -> None:
        self.log = self.log_fn or logger.info

    def default_parameters(self) -> SimulationParameters:
        return self.settings.pipeline.to_parameters()

    def run(
        self,
        params: SimulationParameters | None = None,
        frame_count: int | None = None,
        overflow_policy: OverflowPolicy | None = None,
    ) -> SimulationResult:
        """Simulate and derive metrics.

        Args:
            params: Pipeline parameters. Defaults to configured values.
            frame_count: Frames to simulate. Defaults to configured count.
            overflow_policy: Defaults to the configured policy.

        Returns:
            Simulation results.
        """
        params = params or self.default_parameters()
        frame_count = frame_count if frame_count is not None else self.settings.simulation.frame_count
        overflow_policy = overflow_policy or self.settings.simulation.overflow_policy

        if self.settings.debug:
            self.log(f"Simulating {frame_count} frames with {params.model_dump()}")

        frames = simulate(params, frame_count, overflow_policy=overflow_policy)
        observables = derive_metrics(frames, params)

        if self.settings.debug:
            self.log(
                f"Frame time {observables.frame_time:.3f} ms, "
                f"bottleneck {observables.bottleneck.value}"
            )

        return SimulationResult(
            parameters=params,
            frame_count=frame_count,
            frames=frames,
            observables=observables,
            explanation=describe_parameters(params),
        )

    def run_sweep(
        self,
        parameter: str,
        values: Iterable[float],
        params: SimulationParameters | None = None,
        frame_count: int | None = None,
    ) -> list[SweepPoint]:
        """Re-run the simulation once per value of a single parameter.

        Changing ``command_count`` or ``buffer_capacity`` clamps the other
        one to keep the capacity invariant.

        Args:
            parameter: Name of a SimulationParameters field.
            values: Values to try, in order.
            params: Base parameters. Defaults to configured values.
            frame_count: Frames per run.

        Returns:
            One point per value.
        """
        base = params or self.default_parameters()
        if parameter not in SimulationParameters.model_fields:
            raise ValueError(f"Unknown parameter: {parameter}")

        points = []
        for value in values:
            varied = base.with_updates(**{parameter: value})
            result = self.run(varied, frame_count=frame_count)
            points.append(SweepPoint(
                value=float(value),
                parameters=varied,
                observables=result.observables,
            ))

        self.log(f"Swept {parameter} over {len(points)} values")
        return points
