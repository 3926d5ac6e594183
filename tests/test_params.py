"""Tests for generation parameter validation."""
import dataclasses

import pytest

from necrosis.config import Limits
from necrosis.params import (
    GenerationParameters,
    InvalidParameter,
    validate_origin,
    validate_parameters,
)


class TestValidateParameters:
    """Bounds and type checks on the four generation parameters."""

    def test_valid_parameters_pass_through(self):
        params = validate_parameters(10, 10, 3, 5)
        assert params == GenerationParameters(size=10, iterations=10, turtle_count=3, room_count=5)

    def test_parameters_are_immutable(self):
        params = validate_parameters(10, 10, 3, 5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.size = 20

    def test_negative_size_rejected(self):
        with pytest.raises(InvalidParameter) as excinfo:
            validate_parameters(-1, 10, 3, 5)
        assert excinfo.value.field == "size"
        assert excinfo.value.value == -1

    @pytest.mark.parametrize(
        "args, field",
        [
            ((0, 10, 3, 5), "size"),
            ((10, 10, 0, 5), "turtle_count"),
            ((10, -1, 3, 5), "iterations"),
            ((10, 10, 3, -2), "room_count"),
        ],
    )
    def test_out_of_range_values_name_the_field(self, args, field):
        with pytest.raises(InvalidParameter) as excinfo:
            validate_parameters(*args)
        assert excinfo.value.field == field

    def test_zero_iterations_and_rooms_allowed(self):
        params = validate_parameters(1, 0, 1, 0)
        assert params.iterations == 0
        assert params.room_count == 0

    def test_ceilings_enforced(self):
        limits = Limits(max_size=8, max_iterations=5, max_turtles=2, max_rooms=1)
        assert validate_parameters(8, 5, 2, 1, limits).size == 8
        with pytest.raises(InvalidParameter, match="exceeds"):
            validate_parameters(9, 5, 2, 1, limits)
        with pytest.raises(InvalidParameter):
            validate_parameters(8, 6, 2, 1, limits)
        with pytest.raises(InvalidParameter):
            validate_parameters(8, 5, 3, 1, limits)
        with pytest.raises(InvalidParameter):
            validate_parameters(8, 5, 2, 2, limits)

    def test_default_ceiling_on_size(self):
        with pytest.raises(InvalidParameter):
            validate_parameters(Limits().max_size + 1, 10, 3, 5)

    @pytest.mark.parametrize("bad", [1.5, "10", None, True])
    def test_non_integers_rejected(self, bad):
        with pytest.raises(InvalidParameter, match="integer"):
            validate_parameters(bad, 10, 3, 5)

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            validate_parameters(10, 10, -3, 5)

    def test_validation_is_deterministic(self):
        assert validate_parameters(4, 2, 1, 0) == validate_parameters(4, 2, 1, 0)


class TestValidateOrigin:
    """Origins must be three integers."""

    def test_list_is_normalized_to_tuple(self):
        assert validate_origin([1, -2, 3]) == (1, -2, 3)

    @pytest.mark.parametrize("bad", [(1, 2), (1, 2, 3, 4), (1.0, 2, 3), 5, None])
    def test_malformed_origin_rejected(self, bad):
        with pytest.raises(InvalidParameter) as excinfo:
            validate_origin(bad)
        assert excinfo.value.field == "origin"
