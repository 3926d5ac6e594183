"""Validation of the four generation parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .config import Limits


class InvalidParameter(ValueError):
    """A generation parameter is missing, mistyped or out of range."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        super().__init__(f"Invalid {field}={value!r}: {reason}.")
        self.field = field
        self.value = value
        self.reason = reason


@dataclass(frozen=True)
class GenerationParameters:
    size: int
    iterations: int
    turtle_count: int
    room_count: int


def _check(field: str, value: Any, minimum: int, ceiling: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter(field, value, "must be an integer")
    if value < minimum:
        bound = "positive" if minimum > 0 else "zero or greater"
        raise InvalidParameter(field, value, f"must be {bound}")
    if value > ceiling:
        raise InvalidParameter(field, value, f"exceeds the limit of {ceiling}")
    return value


def validate_origin(origin: Any) -> Tuple[int, int, int]:
    try:
        values = tuple(origin)
    except TypeError:
        raise InvalidParameter("origin", origin, "must be three integers") from None
    if len(values) != 3 or any(isinstance(v, bool) or not isinstance(v, int) for v in values):
        raise InvalidParameter("origin", origin, "must be three integers")
    return values[0], values[1], values[2]


def validate_parameters(
    size: Any,
    iterations: Any,
    turtle_count: Any,
    room_count: Any,
    limits: Optional[Limits] = None,
) -> GenerationParameters:
    limits = limits or Limits()
    return GenerationParameters(
        size=_check("size", size, 1, limits.max_size),
        iterations=_check("iterations", iterations, 0, limits.max_iterations),
        turtle_count=_check("turtle_count", turtle_count, 1, limits.max_turtles),
        room_count=_check("room_count", room_count, 0, limits.max_rooms),
    )
