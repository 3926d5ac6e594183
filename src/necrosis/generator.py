"""Turtle carving and room seeding.

Generation runs in fixed phases over a ``size``-cubed grid:
    * Spawn every turtle on the anchor cell (the origin) and carve it.
    * Step all live turtles ``iterations`` times. A step carves the turtle's
      cell, then either turns it or advances it one cell. A turtle that would
      leave the grid is retired and never carves again.
    * Seed rooms as boxes anchored on carved floor; rooms never overlap and
      never overwrite corridor floor.
    * Mark one door per room where a corridor meets it, wrap every passable
      cell in walls and pick the entry.

Turtles are plain records kept in a list and updated by index, so a run holds
no state outside the grid and the turtle list it allocates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .config import CarvingConfig
from .layout import Cell, DungeonLayout, GenerationStats, Room, Vec3, neighbours
from .params import GenerationParameters
from .random_source import RandomSource

logger = logging.getLogger(__name__)

Grid = List[List[List[Cell]]]

HORIZONTAL: Tuple[Vec3, ...] = ((1, 0, 0), (0, 0, 1), (-1, 0, 0), (0, 0, -1))
VERTICAL: Tuple[Vec3, ...] = ((0, 1, 0), (0, -1, 0))


@dataclass
class Turtle:
    position: Vec3
    facing: Vec3
    steps_left: int
    alive: bool = True

    @property
    def active(self) -> bool:
        """Still inside the grid and with steps left to take."""
        return self.alive and self.steps_left > 0


def init_grid(size: int) -> Grid:
    return [[[Cell.EMPTY for _ in range(size)] for _ in range(size)] for _ in range(size)]


def in_grid(coord: Vec3, size: int) -> bool:
    x, y, z = coord
    return 0 <= x < size and 0 <= y < size and 0 <= z < size


def cell(grid: Grid, coord: Vec3) -> Cell:
    x, y, z = coord
    return grid[x][y][z]


def set_cell(grid: Grid, coord: Vec3, value: Cell) -> None:
    x, y, z = coord
    grid[x][y][z] = value


def draw_facing(rng: RandomSource, vertical_chance: float, exclude: Optional[Vec3] = None) -> Vec3:
    pool = VERTICAL if rng.random() < vertical_chance else HORIZONTAL
    options = [facing for facing in pool if facing != exclude]
    return rng.choice(options)


def spawn_turtles(
    anchor: Vec3, count: int, budget: int, rng: RandomSource, carving: CarvingConfig
) -> List[Turtle]:
    return [
        Turtle(position=anchor, facing=draw_facing(rng, carving.vertical_chance), steps_left=budget)
        for _ in range(count)
    ]


def step_turtles(
    grid: Grid, turtles: Sequence[Turtle], rng: RandomSource, carving: CarvingConfig
) -> List[Tuple[int, Vec3]]:
    """Advance every active turtle by one step.

    A turtle whose step budget is spent stays where it is; it is not retired.

    Returns ``(turtle index, carved cell)`` pairs in turtle order.
    """
    size = len(grid)
    carved: List[Tuple[int, Vec3]] = []
    for index, turtle in enumerate(turtles):
        if not turtle.active:
            continue
        set_cell(grid, turtle.position, Cell.FLOOR)
        carved.append((index, turtle.position))
        turtle.steps_left -= 1
        if rng.random() < carving.turn_chance:
            turtle.facing = draw_facing(rng, carving.vertical_chance, exclude=turtle.facing)
            continue
        x, y, z = turtle.position
        dx, dy, dz = turtle.facing
        ahead = (x + dx, y + dy, z + dz)
        if not in_grid(ahead, size):
            turtle.alive = False
            continue
        turtle.position = ahead
    return carved


def carve(
    grid: Grid, turtles: Sequence[Turtle], iterations: int, rng: RandomSource, carving: CarvingConfig
) -> int:
    """Run up to ``iterations`` steps; returns how many actually ran."""
    steps = 0
    for _ in range(iterations):
        if not any(turtle.active for turtle in turtles):
            break
        step_turtles(grid, turtles, rng, carving)
        steps += 1
    return steps


class DungeonGenerator:
    def __init__(self, carving: Optional[CarvingConfig] = None) -> None:
        self.carving = carving or CarvingConfig()

    def generate(
        self,
        origin: Vec3,
        params: GenerationParameters,
        rng: RandomSource,
        seed: Optional[int] = None,
    ) -> DungeonLayout:
        size = params.size
        anchor: Vec3 = (size // 2, size // 2, size // 2)
        grid = init_grid(size)

        turtles = spawn_turtles(anchor, params.turtle_count, params.iterations, rng, self.carving)
        set_cell(grid, anchor, Cell.FLOOR)
        steps = carve(grid, turtles, params.iterations, rng, self.carving)

        rooms, attempts = self._place_rooms(grid, params.room_count, rng)
        rooms = self._place_doors(grid, rooms)
        self._raise_walls(grid)
        entry = self._select_entry(grid, anchor)

        retired = sum(1 for turtle in turtles if not turtle.alive)
        if len(rooms) < params.room_count:
            logger.info(
                "Placed %d of %d requested rooms after %d attempts.",
                len(rooms),
                params.room_count,
                attempts,
            )
        logger.debug(
            "Generated size=%d dungeon at %s: %d steps, %d/%d turtles retired, %d rooms.",
            size,
            origin,
            steps,
            retired,
            len(turtles),
            len(rooms),
        )

        cells: Dict[Vec3, Cell] = {}
        for x in range(size):
            for y in range(size):
                for z in range(size):
                    value = grid[x][y][z]
                    if value is not Cell.EMPTY:
                        cells[(x, y, z)] = value

        stats = GenerationStats(
            steps_run=steps,
            turtles_spawned=len(turtles),
            turtles_retired=retired,
            rooms_requested=params.room_count,
            rooms_placed=len(rooms),
            placement_attempts=attempts,
            seed=seed,
        )
        return DungeonLayout(
            origin=origin,
            size=size,
            anchor=anchor,
            cells=cells,
            rooms=tuple(rooms),
            entry=entry,
            stats=stats,
        )

    def _place_rooms(self, grid: Grid, room_count: int, rng: RandomSource) -> Tuple[List[Room], int]:
        rooms: List[Room] = []
        if room_count == 0:
            return rooms, 0
        size = len(grid)
        carving = self.carving
        anchors = [
            (x, y, z)
            for x in range(size)
            for y in range(size)
            for z in range(size)
            if grid[x][y][z] is Cell.FLOOR
        ]
        budget = room_count * carving.placement_attempts
        attempts = 0
        while len(rooms) < room_count and attempts < budget:
            attempts += 1
            ax, ay, az = rng.choice(anchors)
            width = rng.randint(min(carving.room_min, size), min(carving.room_max, size))
            depth = rng.randint(min(carving.room_min, size), min(carving.room_max, size))
            height = rng.randint(min(carving.room_min_height, size), min(carving.room_max_height, size))
            # Anchor inside the box or just beside it horizontally; the box always spans the anchor's level.
            x = rng.randint(ax - width, ax + 1)
            y = rng.randint(ay - height + 1, ay)
            z = rng.randint(az - depth, az + 1)
            x = max(0, min(x, size - width))
            y = max(0, min(y, size - height))
            z = max(0, min(z, size - depth))
            candidate = Room(len(rooms), x, y, z, width, height, depth)
            if not self._fits(grid, candidate, rooms):
                continue
            for coord in candidate.cells():
                if cell(grid, coord) is Cell.EMPTY:
                    set_cell(grid, coord, Cell.ROOM)
            rooms.append(candidate)
        return rooms, attempts

    @staticmethod
    def _fits(grid: Grid, candidate: Room, rooms: Sequence[Room]) -> bool:
        size = len(grid)
        if not (in_grid((candidate.x, candidate.y, candidate.z), size) and in_grid(candidate.max_corner, size)):
            return False
        if any(candidate.intersects(room) for room in rooms):
            return False
        has_space = False
        touches_floor = False
        for coord in candidate.cells():
            value = cell(grid, coord)
            if value is Cell.EMPTY:
                has_space = True
            elif value is Cell.FLOOR:
                touches_floor = True
            if not touches_floor:
                touches_floor = any(
                    in_grid(n, size) and not candidate.contains(n) and cell(grid, n) is Cell.FLOOR
                    for n in neighbours(coord)
                )
            if has_space and touches_floor:
                return True
        return False

    @staticmethod
    def _place_doors(grid: Grid, rooms: Sequence[Room]) -> List[Room]:
        size = len(grid)
        placed: List[Room] = []
        for room in rooms:
            door: Optional[Vec3] = None
            for coord in room.cells():
                if cell(grid, coord) is not Cell.ROOM:
                    continue
                if any(
                    in_grid(n, size) and not room.contains(n) and cell(grid, n) is Cell.FLOOR
                    for n in neighbours(coord)
                ):
                    door = coord
                    set_cell(grid, coord, Cell.DOOR)
                    break
            placed.append(replace(room, door=door))
        return placed

    @staticmethod
    def _raise_walls(grid: Grid) -> None:
        size = len(grid)
        walls = set()
        for x in range(size):
            for y in range(size):
                for z in range(size):
                    if not grid[x][y][z].passable:
                        continue
                    for n in neighbours((x, y, z)):
                        if in_grid(n, size) and cell(grid, n) is Cell.EMPTY:
                            walls.add(n)
        for coord in walls:
            set_cell(grid, coord, Cell.WALL)

    @staticmethod
    def _select_entry(grid: Grid, anchor: Vec3) -> Vec3:
        size = len(grid)
        ax, ay, az = anchor
        best: Optional[Tuple[int, Vec3]] = None
        for x in range(size):
            for y in range(size):
                for z in range(size):
                    if grid[x][y][z] is not Cell.FLOOR:
                        continue
                    key = ((x - ax) ** 2 + (y - ay) ** 2 + (z - az) ** 2, (x, y, z))
                    if best is None or key < best:
                        best = key
        return best[1] if best is not None else anchor
