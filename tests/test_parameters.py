"""Tests for pipeline parameter validation."""

import pytest
from pydantic import ValidationError

from framesim.models.parameters import SimulationParameters


def make_params(**overrides):
    values = dict(
        script_time=2.0,
        command_count=100,
        generation_factor=0.01,
        processing_factor=0.02,
        buffer_capacity=200,
        max_frames_ahead=2,
    )
    values.update(overrides)
    return SimulationParameters(**values)


class TestValidation:
    """Tests for field and cross-field constraints."""

    def test_valid_parameters(self):
        """Should accept in-range values."""
        params = make_params()
        assert params.command_count == 100
        assert params.buffer_capacity == 200

    @pytest.mark.parametrize("field", [
        "script_time", "command_count", "generation_factor",
        "processing_factor", "buffer_capacity",
    ])
    def test_negative_rejected(self, field):
        """Negative values are invalid."""
        with pytest.raises(ValidationError):
            make_params(**{field: -1})

    def test_zero_frames_ahead_rejected(self):
        """The CPU must be allowed at least one frame."""
        with pytest.raises(ValidationError):
            make_params(max_frames_ahead=0)

    def test_fractional_count_rejected(self):
        """Command count must be integral."""
        with pytest.raises(ValidationError):
            make_params(command_count=10.5)

    def test_capacity_below_commands_rejected(self):
        """Buffer must hold at least one frame's commands."""
        with pytest.raises(ValidationError, match="buffer_capacity"):
            make_params(command_count=100, buffer_capacity=99)

    def test_capacity_equal_commands_allowed(self):
        """Zero slack is still valid."""
        params = make_params(command_count=100, buffer_capacity=100)
        assert params.has_valid_capacity

    def test_frozen(self):
        """Parameters are immutable."""
        params = make_params()
        with pytest.raises(ValidationError):
            params.script_time = 5.0

    def test_model_construct_bypasses_invariant(self):
        """model_construct is the only way to get an undersized buffer."""
        params = SimulationParameters.model_construct(
            script_time=1.0,
            command_count=100,
            generation_factor=0.0,
            processing_factor=0.0,
            buffer_capacity=10,
            max_frames_ahead=1,
        )
        assert not params.has_valid_capacity


class TestDerivedCosts:
    """Tests for per-frame cost properties."""

    def test_costs(self):
        """Costs scale with command count."""
        params = make_params(script_time=1.5, command_count=200, generation_factor=0.01,
                             processing_factor=0.03, buffer_capacity=200)
        assert params.generation_cost == pytest.approx(2.0)
        assert params.gpu_cost == pytest.approx(6.0)
        assert params.cpu_cost == pytest.approx(3.5)


class TestCoupledSetters:
    """Tests for clamping between command count and buffer capacity."""

    def test_command_count_grows_buffer(self):
        """Raising commands past capacity raises capacity to match."""
        params = make_params(command_count=100, buffer_capacity=150).with_command_count(300)
        assert params.command_count == 300
        assert params.buffer_capacity == 300

    def test_command_count_within_buffer(self):
        """Capacity is untouched when commands still fit."""
        params = make_params(command_count=100, buffer_capacity=150).with_command_count(120)
        assert params.buffer_capacity == 150

    def test_buffer_shrinks_commands(self):
        """Lowering capacity below commands lowers commands to match."""
        params = make_params(command_count=100, buffer_capacity=150).with_buffer_capacity(60)
        assert params.buffer_capacity == 60
        assert params.command_count == 60

    def test_buffer_grow_keeps_commands(self):
        """Growing capacity leaves the command count alone."""
        params = make_params(command_count=100, buffer_capacity=150).with_buffer_capacity(400)
        assert params.command_count == 100

    def test_original_unchanged(self):
        """Setters return new records."""
        original = make_params()
        original.with_command_count(1000)
        assert original.command_count == 100

    def test_with_updates_routes_through_setters(self):
        """A single coupled field change stays valid."""
        params = make_params(command_count=100, buffer_capacity=100)
        assert params.with_updates(command_count=250).buffer_capacity == 250
        assert params.with_updates(buffer_capacity=40).command_count == 40

    def test_with_updates_other_fields(self):
        """Plain fields are revalidated."""
        params = make_params().with_updates(script_time=4.0, max_frames_ahead=3)
        assert params.script_time == 4.0
        assert params.max_frames_ahead == 3
        with pytest.raises(ValidationError):
            make_params().with_updates(processing_factor=-0.1)

    def test_with_updates_both_coupled_fields(self):
        """Giving both fields validates them together."""
        params = make_params().with_updates(command_count=50, buffer_capacity=60)
        assert (params.command_count, params.buffer_capacity) == (50, 60)
        with pytest.raises(ValidationError):
            make_params().with_updates(command_count=80, buffer_capacity=60)

    def test_with_updates_rejects_fractional_counts(self):
        """Coupled counts are validated, not truncated."""
        with pytest.raises(ValidationError):
            make_params().with_updates(command_count=150.7)
        with pytest.raises(ValidationError):
            make_params().with_updates(buffer_capacity=150.7)

    def test_with_updates_unknown_field(self):
        """Unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown"):
            make_params().with_updates(draw_calls=10)
