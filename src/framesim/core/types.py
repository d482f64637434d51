"""Type definitions for the simulation system."""

from typing import TypeAlias

import numpy as np

# All simulated timestamps and durations are milliseconds
Milliseconds: TypeAlias = float

# Per-frame column of timestamps, as consumed by plotting
TimeSeries: TypeAlias = np.ndarray


def to_time_series(values: list[float]) -> TimeSeries:
    """Convert a list of timestamps to a float64 NumPy array."""
    return np.asarray(values, dtype=np.float64)
