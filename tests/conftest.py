"""Shared fixtures for simulation tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from framesim.models.parameters import SimulationParameters


@pytest.fixture
def cpu_bound_params():
    """Scripts dominate: 2 ms scripts, 1 ms render, 2 ms GPU."""
    return SimulationParameters(
        script_time=2.0,
        command_count=100,
        generation_factor=0.01,
        processing_factor=0.02,
        buffer_capacity=100,
        max_frames_ahead=2,
    )


@pytest.fixture
def gpu_bound_params():
    """2 ms of CPU work feeding 5 ms of GPU work, no buffer slack."""
    return SimulationParameters(
        script_time=1.0,
        command_count=100,
        generation_factor=0.01,
        processing_factor=0.05,
        buffer_capacity=100,
        max_frames_ahead=10,
    )


@pytest.fixture
def depth_bound_params():
    """GPU-heavy with a roomy buffer and no pipelining."""
    return SimulationParameters(
        script_time=1.0,
        command_count=100,
        generation_factor=0.01,
        processing_factor=0.05,
        buffer_capacity=1000,
        max_frames_ahead=1,
    )


@pytest.fixture
def undersized_buffer_params():
    """Buffer smaller than one frame's commands (bypasses validation)."""
    return SimulationParameters.model_construct(
        script_time=1.0,
        command_count=100,
        generation_factor=0.01,
        processing_factor=0.05,
        buffer_capacity=50,
        max_frames_ahead=10,
    )
