"""Data model for pipeline parameters, frame records and observables."""

from framesim.models.frame import FrameRecord, ReleaseEvent
from framesim.models.metrics import Bottleneck, Observables
from framesim.models.parameters import SimulationParameters

__all__ = [
    "Bottleneck",
    "FrameRecord",
    "Observables",
    "ReleaseEvent",
    "SimulationParameters",
]
