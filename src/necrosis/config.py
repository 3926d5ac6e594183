from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for 3.10
    import tomli as tomllib  # type: ignore[no-redef]


@dataclass(frozen=True)
class DefaultsConfig:
    size: int = 10
    iterations: int = 10
    turtles: int = 3
    rooms: int = 5
    seed: Optional[int] = None


@dataclass(frozen=True)
class Limits:
    max_size: int = 64
    max_iterations: int = 10_000
    max_turtles: int = 64
    max_rooms: int = 64


@dataclass(frozen=True)
class CarvingConfig:
    turn_chance: float = 0.3
    vertical_chance: float = 0.1
    room_min: int = 2
    room_max: int = 4
    room_min_height: int = 1
    room_max_height: int = 2
    placement_attempts: int = 20


@dataclass(frozen=True)
class EvaluationConfig:
    candidate_count: int = 1
    weights: Mapping[str, float] = field(
        default_factory=lambda: {
            "room_fill": 1.0,
            "density": 0.5,
            "branching_factor": 0.5,
            "dead_end_penalty": -0.5,
        }
    )


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class Config:
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    limits: Limits = field(default_factory=Limits)
    carving: CarvingConfig = field(default_factory=CarvingConfig)
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def default_config() -> Config:
    return Config()


def _table(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name, {})
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ValueError(f"[{name}] must be a table if provided.")
    return section


def _int(
    section: Mapping[str, Any], table: str, key: str, default: int, minimum: Optional[int] = None
) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{table}.{key} must be an integer.")
    if minimum is not None and value < minimum:
        raise ValueError(f"{table}.{key} must be >= {minimum}.")
    return value


def _chance(section: Mapping[str, Any], table: str, key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{table}.{key} must be a number.")
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{table}.{key} must lie between 0 and 1.")
    return value


def _parse_defaults(section: Mapping[str, Any]) -> DefaultsConfig:
    base = DefaultsConfig()
    seed = section.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ValueError("defaults.seed must be an integer.")
    # Ranges are checked by validate_parameters when the defaults are used.
    return DefaultsConfig(
        size=_int(section, "defaults", "size", base.size),
        iterations=_int(section, "defaults", "iterations", base.iterations),
        turtles=_int(section, "defaults", "turtles", base.turtles),
        rooms=_int(section, "defaults", "rooms", base.rooms),
        seed=seed,
    )


def _parse_limits(section: Mapping[str, Any]) -> Limits:
    base = Limits()
    return Limits(
        max_size=_int(section, "limits", "max_size", base.max_size, minimum=1),
        max_iterations=_int(section, "limits", "max_iterations", base.max_iterations, minimum=0),
        max_turtles=_int(section, "limits", "max_turtles", base.max_turtles, minimum=1),
        max_rooms=_int(section, "limits", "max_rooms", base.max_rooms, minimum=0),
    )


def _parse_carving(section: Mapping[str, Any]) -> CarvingConfig:
    base = CarvingConfig()
    carving = CarvingConfig(
        turn_chance=_chance(section, "carving", "turn_chance", base.turn_chance),
        vertical_chance=_chance(section, "carving", "vertical_chance", base.vertical_chance),
        room_min=_int(section, "carving", "room_min", base.room_min, minimum=1),
        room_max=_int(section, "carving", "room_max", base.room_max, minimum=1),
        room_min_height=_int(section, "carving", "room_min_height", base.room_min_height, minimum=1),
        room_max_height=_int(section, "carving", "room_max_height", base.room_max_height, minimum=1),
        placement_attempts=_int(section, "carving", "placement_attempts", base.placement_attempts, minimum=1),
    )
    if carving.room_min > carving.room_max:
        raise ValueError("carving.room_min must not exceed carving.room_max.")
    if carving.room_min_height > carving.room_max_height:
        raise ValueError("carving.room_min_height must not exceed carving.room_max_height.")
    return carving


def _parse_evaluation(section: Mapping[str, Any]) -> EvaluationConfig:
    candidate_count = _int(section, "evaluation", "candidate_count", 1, minimum=1)
    weights_raw = section.get("weights")
    if weights_raw is None:
        return EvaluationConfig(candidate_count=candidate_count)
    if not isinstance(weights_raw, Mapping):
        raise ValueError("[evaluation.weights] must be a table if provided.")
    weights: Dict[str, float] = {}
    for key, value in weights_raw.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"evaluation.weights.{key} must be a number.")
        weights[str(key)] = float(value)
    return EvaluationConfig(candidate_count=candidate_count, weights=weights)


def _parse_logging(section: Mapping[str, Any]) -> LoggingConfig:
    level = str(section.get("level", "INFO")).strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {sorted(_LOG_LEVELS)}.")
    return LoggingConfig(level=level)


def parse_config(raw: Mapping[str, Any]) -> Config:
    return Config(
        defaults=_parse_defaults(_table(raw, "defaults")),
        limits=_parse_limits(_table(raw, "limits")),
        carving=_parse_carving(_table(raw, "carving")),
        evaluation=_parse_evaluation(_table(raw, "evaluation")),
        logging=_parse_logging(_table(raw, "logging")),
    )


def load_config(path: str | Path) -> Config:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("rb") as handle:
        raw = tomllib.load(handle)

    return parse_config(raw)
