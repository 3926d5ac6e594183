from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .config import EvaluationConfig
from .layout import Cell, DungeonLayout, neighbours


@dataclass
class LayoutMetrics:
    carved_cells: int
    room_cells: int
    wall_cells: int
    density: float
    room_fill: float
    dead_end_ratio: float
    branching_factor: float


def compute_metrics(layout: DungeonLayout) -> LayoutMetrics:
    cells = layout.cells
    floor = [coord for coord, value in cells.items() if value is Cell.FLOOR]
    passable = sum(1 for value in cells.values() if value.passable)
    room_cells = sum(1 for value in cells.values() if value in (Cell.ROOM, Cell.DOOR))
    wall_cells = sum(1 for value in cells.values() if value is Cell.WALL)

    dead_ends = 0
    branching = 0
    for coord in floor:
        degree = sum(1 for n in neighbours(coord) if cells.get(n, Cell.EMPTY).passable)
        if coord != layout.entry and degree <= 1:
            dead_ends += 1
        if degree >= 3:
            branching += 1

    total_floor = max(len(floor), 1)
    requested = layout.stats.rooms_requested
    room_fill = len(layout.rooms) / requested if requested else 1.0

    return LayoutMetrics(
        carved_cells=len(floor),
        room_cells=room_cells,
        wall_cells=wall_cells,
        density=passable / layout.size**3,
        room_fill=room_fill,
        dead_end_ratio=dead_ends / total_floor,
        branching_factor=branching / total_floor,
    )


def score_layout(layout: DungeonLayout, evaluation: EvaluationConfig) -> tuple[float, LayoutMetrics]:
    metrics = compute_metrics(layout)
    weights = evaluation.weights

    score = 0.0
    score += weights.get("room_fill", 0.0) * metrics.room_fill
    score += weights.get("density", 0.0) * metrics.density
    score += weights.get("branching_factor", 0.0) * metrics.branching_factor
    score += weights.get("dead_end_penalty", 0.0) * metrics.dead_end_ratio

    return score, metrics


def layout_payload(layout: DungeonLayout) -> Dict[str, Any]:
    """JSON-ready layout with its metrics under ``evaluation``."""
    payload = layout.to_dict()
    metrics = compute_metrics(layout)
    payload["evaluation"] = asdict(metrics)
    return payload
