"""Core configuration, constants and type definitions."""

from framesim.core.config import Settings
from framesim.core.types import Milliseconds, TimeSeries

__all__ = [
    "Milliseconds",
    "Settings",
    "TimeSeries",
]
