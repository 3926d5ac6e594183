"""Shared fixtures for the dungeon generator tests."""
import logging
import pytest

from necrosis.builder import generate
from necrosis.config import default_config
from necrosis.layout import Cell, DungeonLayout, GenerationStats
from necrosis.params import validate_parameters


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by setup_logging so they never outlive a captured stream."""
    yield
    logger = logging.getLogger("necrosis")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config():
    return default_config()


@pytest.fixture
def make_layout():
    """Generate a layout from raw parameters with a fixed seed."""

    def _make(size=10, iterations=10, turtles=3, rooms=5, seed=7, origin=(0, 0, 0), config=None):
        params = validate_parameters(size, iterations, turtles, rooms)
        return generate(origin, params, config=config, seed=seed)

    return _make


@pytest.fixture
def line_layout():
    """Three floor cells in a row on the middle level of a 3x3x3 grid."""
    return DungeonLayout(
        origin=(100, 64, -20),
        size=3,
        anchor=(1, 1, 1),
        cells={
            (0, 1, 1): Cell.FLOOR,
            (1, 1, 1): Cell.FLOOR,
            (2, 1, 1): Cell.FLOOR,
            (1, 2, 1): Cell.WALL,
            (1, 0, 1): Cell.WALL,
        },
        rooms=(),
        entry=(1, 1, 1),
        stats=GenerationStats(
            steps_run=1,
            turtles_spawned=1,
            turtles_retired=0,
            rooms_requested=0,
            rooms_placed=0,
            placement_attempts=0,
        ),
    )
