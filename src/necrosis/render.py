from __future__ import annotations

from typing import Optional

from .layout import Cell, DungeonLayout

GLYPHS = {
    Cell.EMPTY: " ",
    Cell.FLOOR: ".",
    Cell.WALL: "#",
    Cell.ROOM: "r",
    Cell.DOOR: "+",
}
ENTRY_GLYPH = "E"


def render_level(layout: DungeonLayout, level: int) -> str:
    """Render one horizontal slice; rows run from high ``z`` to low ``z``."""
    if not 0 <= level < layout.size:
        raise ValueError(f"Level {level} lies outside 0..{layout.size - 1}.")
    size = layout.size
    grid = [[GLYPHS[Cell.EMPTY] for _ in range(size)] for _ in range(size)]
    for (x, y, z), value in layout.cells.items():
        if y == level:
            grid[size - 1 - z][x] = GLYPHS[value]
    ex, ey, ez = layout.entry
    if ey == level:
        grid[size - 1 - ez][ex] = ENTRY_GLYPH
    lines = ["".join(row).rstrip() for row in grid]
    return "\n".join(lines)


def render_ascii(layout: DungeonLayout, level: Optional[int] = None) -> str:
    if level is not None:
        return render_level(layout, level)
    blocks = []
    for y in range(layout.size - 1, -1, -1):
        blocks.append(f"-- level {y} --")
        blocks.append(render_level(layout, y))
    return "\n".join(blocks)
