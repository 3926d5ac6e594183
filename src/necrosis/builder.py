"""Entry points binding validation, generation and placement together.

``DungeonBuilder.generate_at`` and ``DungeonBuilder.generate_preview_at`` run
the same algorithm; they differ only in which ``Placement`` hook receives the
finished layout.
"""
from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional, Protocol

from .config import Config, default_config
from .evaluation import LayoutMetrics, score_layout
from .generator import DungeonGenerator
from .layout import DungeonLayout, Vec3
from .params import GenerationParameters, validate_origin, validate_parameters
from .random_source import RandomSource, make_random

logger = logging.getLogger(__name__)

_SEED_CEILING = 2**32 - 1


class Placement(Protocol):
    """Materializes layouts in a concrete world."""

    def place(self, layout: DungeonLayout) -> None: ...

    def preview(self, layout: DungeonLayout) -> None: ...


class Candidate(NamedTuple):
    layout: DungeonLayout
    score: float
    metrics: LayoutMetrics


def generate(
    origin: Vec3,
    params: GenerationParameters,
    rng: Optional[RandomSource] = None,
    config: Optional[Config] = None,
    seed: Optional[int] = None,
) -> DungeonLayout:
    config = config or default_config()
    origin = validate_origin(origin)
    # Hand-built parameters have not been through validate_parameters.
    params = validate_parameters(
        params.size, params.iterations, params.turtle_count, params.room_count, config.limits
    )
    if rng is None:
        rng = make_random(seed)
    return DungeonGenerator(config.carving).generate(origin, params, rng, seed=seed)


class DungeonBuilder:
    def __init__(
        self,
        config: Optional[Config] = None,
        rng: Optional[RandomSource] = None,
        placement: Optional[Placement] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or default_config()
        if seed is None:
            seed = self.config.defaults.seed
        # Every run draws its own seed from here so any layout can be reproduced from its stats.
        self._seeds = rng or make_random(seed)
        self.placement = placement

    def parameters(
        self,
        size: Any = None,
        iterations: Any = None,
        turtles: Any = None,
        rooms: Any = None,
    ) -> GenerationParameters:
        defaults = self.config.defaults
        return validate_parameters(
            defaults.size if size is None else size,
            defaults.iterations if iterations is None else iterations,
            defaults.turtles if turtles is None else turtles,
            defaults.rooms if rooms is None else rooms,
            self.config.limits,
        )

    def generate_at(
        self,
        origin: Vec3,
        size: Any = None,
        iterations: Any = None,
        turtles: Any = None,
        rooms: Any = None,
    ) -> DungeonLayout:
        layout = self._build(origin, self.parameters(size, iterations, turtles, rooms))
        if self.placement is not None:
            self.placement.place(layout)
        return layout

    def generate_preview_at(
        self,
        origin: Vec3,
        size: Any = None,
        iterations: Any = None,
        turtles: Any = None,
        rooms: Any = None,
    ) -> DungeonLayout:
        layout = self._build(origin, self.parameters(size, iterations, turtles, rooms))
        if self.placement is not None:
            self.placement.preview(layout)
        return layout

    def select_best(
        self,
        origin: Vec3,
        params: GenerationParameters,
        candidate_count: Optional[int] = None,
    ) -> Candidate:
        origin = validate_origin(origin)
        count = candidate_count if candidate_count is not None else self.config.evaluation.candidate_count
        best = self._candidate(origin, params)
        for _ in range(count - 1):
            candidate = self._candidate(origin, params)
            if candidate.score > best.score:
                best = candidate
        logger.debug("Selected seed %s with score %.3f.", best.layout.stats.seed, best.score)
        return best

    def _candidate(self, origin: Vec3, params: GenerationParameters) -> Candidate:
        seed = self._seeds.randint(0, _SEED_CEILING)
        layout = generate(origin, params, config=self.config, seed=seed)
        score, metrics = score_layout(layout, self.config.evaluation)
        return Candidate(layout, score, metrics)

    def _build(self, origin: Vec3, params: GenerationParameters) -> DungeonLayout:
        return self.select_best(origin, params).layout
