"""Pipeline simulation engine and metrics."""

from framesim.simulation.buffer import CommandBuffer
from framesim.simulation.engine import BufferCapacityError, simulate
from framesim.simulation.metrics import classify_bottleneck, derive_metrics
from framesim.simulation.runner import (
    SimulationResult,
    SimulationRunner,
    SweepPoint,
    describe_parameters,
)

__all__ = [
    "BufferCapacityError",
    "CommandBuffer",
    "SimulationResult",
    "SimulationRunner",
    "SweepPoint",
    "classify_bottleneck",
    "derive_metrics",
    "describe_parameters",
    "simulate",
]
