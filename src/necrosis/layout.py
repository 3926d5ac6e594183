from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

Vec3 = Tuple[int, int, int]

FACE_OFFSETS: Tuple[Vec3, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)


class Cell(str, Enum):
    EMPTY = "empty"
    FLOOR = "floor"
    WALL = "wall"
    ROOM = "room"
    DOOR = "door"

    @property
    def passable(self) -> bool:
        return self in (Cell.FLOOR, Cell.ROOM, Cell.DOOR)


def neighbours(coord: Vec3) -> Iterator[Vec3]:
    x, y, z = coord
    for dx, dy, dz in FACE_OFFSETS:
        yield (x + dx, y + dy, z + dz)


@dataclass(frozen=True)
class Room:
    """Axis-aligned box of grid cells. ``y`` is the vertical axis."""

    index: int
    x: int
    y: int
    z: int
    width: int
    height: int
    depth: int
    door: Optional[Vec3] = None

    @property
    def max_corner(self) -> Vec3:
        return (self.x + self.width - 1, self.y + self.height - 1, self.z + self.depth - 1)

    @property
    def center(self) -> Vec3:
        return (self.x + self.width // 2, self.y + self.height // 2, self.z + self.depth // 2)

    @property
    def volume(self) -> int:
        return self.width * self.height * self.depth

    def contains(self, coord: Vec3) -> bool:
        cx, cy, cz = coord
        return (
            self.x <= cx < self.x + self.width
            and self.y <= cy < self.y + self.height
            and self.z <= cz < self.z + self.depth
        )

    def intersects(self, other: "Room") -> bool:
        return (
            self.x < other.x + other.width
            and other.x < self.x + self.width
            and self.y < other.y + other.height
            and other.y < self.y + self.height
            and self.z < other.z + other.depth
            and other.z < self.z + self.depth
        )

    def cells(self) -> Iterator[Vec3]:
        for ix in range(self.x, self.x + self.width):
            for iy in range(self.y, self.y + self.height):
                for iz in range(self.z, self.z + self.depth):
                    yield ix, iy, iz

    def to_dict(self) -> Dict[str, object]:
        return {
            "index": self.index,
            "min": [self.x, self.y, self.z],
            "max": list(self.max_corner),
            "door": list(self.door) if self.door is not None else None,
        }


@dataclass(frozen=True)
class GenerationStats:
    steps_run: int
    turtles_spawned: int
    turtles_retired: int
    rooms_requested: int
    rooms_placed: int
    placement_attempts: int
    seed: Optional[int] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "steps_run": self.steps_run,
            "turtles_spawned": self.turtles_spawned,
            "turtles_retired": self.turtles_retired,
            "rooms_requested": self.rooms_requested,
            "rooms_placed": self.rooms_placed,
            "placement_attempts": self.placement_attempts,
            "seed": self.seed,
        }


@dataclass(frozen=True)
class DungeonLayout:
    """Result of one generation run.

    Cells are keyed by grid coordinates in ``0..size-1`` on every axis; only
    non-empty cells are stored. ``anchor`` is the grid coordinate that maps to
    ``origin`` in world space.
    """

    origin: Vec3
    size: int
    anchor: Vec3
    cells: Mapping[Vec3, Cell]
    rooms: Tuple[Room, ...]
    entry: Vec3
    stats: GenerationStats

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))
        object.__setattr__(self, "rooms", tuple(self.rooms))

    @property
    def extent(self) -> Vec3:
        return (self.size, self.size, self.size)

    def in_bounds(self, coord: Vec3) -> bool:
        return all(0 <= value < self.size for value in coord)

    def cell_at(self, coord: Vec3) -> Cell:
        if not self.in_bounds(coord):
            raise IndexError(f"{coord} lies outside the {self.size}^3 grid.")
        return self.cells.get(coord, Cell.EMPTY)

    def count(self, state: Cell) -> int:
        if state is Cell.EMPTY:
            return self.size**3 - len(self.cells)
        return sum(1 for value in self.cells.values() if value is state)

    def floor_cells(self) -> List[Vec3]:
        return sorted(coord for coord, value in self.cells.items() if value is Cell.FLOOR)

    def passable_cells(self) -> List[Vec3]:
        return sorted(coord for coord, value in self.cells.items() if value.passable)

    def to_world(self, coord: Vec3) -> Vec3:
        return (
            self.origin[0] + coord[0] - self.anchor[0],
            self.origin[1] + coord[1] - self.anchor[1],
            self.origin[2] + coord[2] - self.anchor[2],
        )

    def world_cells(self) -> Iterator[Tuple[Vec3, Cell]]:
        for coord in sorted(self.cells):
            yield self.to_world(coord), self.cells[coord]

    def to_dict(self) -> Dict[str, object]:
        return {
            "origin": list(self.origin),
            "size": self.size,
            "anchor": list(self.anchor),
            "entry": list(self.entry),
            "rooms": [room.to_dict() for room in self.rooms],
            "cells": [[x, y, z, self.cells[(x, y, z)].value] for x, y, z in sorted(self.cells)],
            "stats": self.stats.to_dict(),
        }
