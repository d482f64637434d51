"""Configuration and settings for the simulation system."""

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from framesim.core.constants import DEFAULT_FRAME_COUNT, TARGET_TICKS

if TYPE_CHECKING:
    from framesim.models.parameters import SimulationParameters


class OverflowPolicy(str, Enum):
    """What to do when a frame's commands can never fit in the buffer."""

    STRICT = "strict"  # Reject the run before simulating
    PROCEED = "proceed"  # Enqueue over capacity and flag the frame


class PipelineSettings(BaseSettings):
    """Default pipeline parameters used when none are given."""

    model_config = SettingsConfigDict(env_prefix="PIPELINE_")

    # CPU script stage (ms per frame)
    script_time: float = 2.0

    # Render commands emitted per frame
    command_count: int = 100

    # CPU render-thread cost per command (ms)
    generation_factor: float = 0.01

    # GPU cost per command (ms)
    processing_factor: float = 0.02

    # Commands the buffer may hold at once
    buffer_capacity: int = 100

    # Frames the CPU may run ahead of GPU completion
    max_frames_ahead: int = 2

    def to_parameters(self) -> "SimulationParameters":
        """Build validated simulation parameters from these defaults."""
        from framesim.models.parameters import SimulationParameters

        return SimulationParameters(
            script_time=self.script_time,
            command_count=self.command_count,
            generation_factor=self.generation_factor,
            processing_factor=self.processing_factor,
            buffer_capacity=max(self.buffer_capacity, self.command_count),
            max_frames_ahead=self.max_frames_ahead,
        )


class SimulationSettings(BaseSettings):
    """Simulation run configuration."""

    model_config = SettingsConfigDict(env_prefix="SIM_")

    # Frames per run
    frame_count: int = DEFAULT_FRAME_COUNT

    # Handling of buffer_capacity < command_count
    overflow_policy: OverflowPolicy = OverflowPolicy.STRICT


class PlotSettings(BaseSettings):
    """Timeline plot configuration."""

    model_config = SettingsConfigDict(env_prefix="PLOT_")

    # Figure size (inches)
    fig_width: float = 14.0
    fig_height: float = 6.0
    dpi: int = 150

    # Axis ticks
    target_ticks: int = TARGET_TICKS


class Settings(BaseSettings):
    """Master configuration aggregating all subsystems."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Subsystem settings
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    plot: PlotSettings = Field(default_factory=PlotSettings)

    # Debug mode
    debug: bool = False


def get_settings() -> Settings:
    """Load settings from environment and .env file."""
    return Settings()
