"""Pipeline parameters with the buffer-capacity invariant enforced on construction."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SimulationParameters(BaseModel):
    """The six inputs of a pipeline simulation.

    All durations are milliseconds. ``buffer_capacity`` may never fall below
    ``command_count``; use :meth:`with_command_count` and
    :meth:`with_buffer_capacity` to change either one while keeping the
    other in range.
    """

    model_config = ConfigDict(frozen=True)

    script_time: float = Field(ge=0, description="CPU script stage per frame (ms)")
    command_count: int = Field(ge=0, description="Render commands per frame")
    generation_factor: float = Field(ge=0, description="CPU ms per command")
    processing_factor: float = Field(ge=0, description="GPU ms per command")
    buffer_capacity: int = Field(ge=0, description="Commands the buffer can hold")
    max_frames_ahead: int = Field(ge=1, description="Frames the CPU may run ahead")

    @model_validator(mode="after")
    def check_capacity(self) -> Self:
        """A frame's commands must fit in an empty buffer."""
        if self.buffer_capacity < self.command_count:
            raise ValueError(
                f"buffer_capacity ({self.buffer_capacity}) must be at least "
                f"command_count ({self.command_count})"
            )
        return self

    @property
    def generation_cost(self) -> float:
        """CPU render-thread time per frame (ms)."""
        return self.command_count * self.generation_factor

    @property
    def gpu_cost(self) -> float:
        """GPU execution time per frame (ms)."""
        return self.command_count * self.processing_factor

    @property
    def cpu_cost(self) -> float:
        """Total CPU time per frame (ms)."""
        return self.script_time + self.generation_cost

    @property
    def has_valid_capacity(self) -> bool:
        # False only for records built with model_construct()
        return self.buffer_capacity >= self.command_count

    def with_command_count(self, command_count: int) -> "SimulationParameters":
        """Change the command count, growing the buffer to fit if needed."""
        return self._rebuild(
            command_count=command_count,
            buffer_capacity=max(self.buffer_capacity, command_count),
        )

    def with_buffer_capacity(self, buffer_capacity: int) -> "SimulationParameters":
        """Change the buffer capacity, shrinking the command count to fit if needed."""
        return self._rebuild(
            buffer_capacity=buffer_capacity,
            command_count=min(self.command_count, buffer_capacity),
        )

    def with_updates(self, **changes: Any) -> "SimulationParameters":
        """Return a validated copy with the given fields changed.

        ``command_count`` and ``buffer_capacity`` go through the coupled
        setters, so a single change never violates the capacity invariant.
        If both are given they are applied as-is and validated together.
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown parameter(s): {', '.join(sorted(unknown))}")

        if "command_count" in changes and "buffer_capacity" in changes:
            return self._rebuild(**changes)

        params = self
        if "command_count" in changes:
            params = params.with_command_count(changes.pop("command_count"))
        if "buffer_capacity" in changes:
            params = params.with_buffer_capacity(changes.pop("buffer_capacity"))
        return params._rebuild(**changes) if changes else params

    def _rebuild(self, **changes: Any) -> "SimulationParameters":
        # model_copy() skips validation, so go through the constructor
        return type(self)(**{**self.model_dump(), **changes})
