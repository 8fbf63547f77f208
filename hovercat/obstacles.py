import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class Obstacle:
    x: float
    gap_center: float
    scored: bool = False


class ObstacleStream:
    """Spawns gap-obstacles at the right edge and retires them off the left edge.

    Obstacles are kept in spawn order, which is also their left-to-right order
    on screen. Each new gap center is drawn within ``max_gap_delta`` of the
    previous one and always keeps the whole gap inside the field.
    """

    def __init__(self, field_width: float, field_height: float, obstacle_width: float,
                 gap_height: float, max_gap_delta: float, seed: Optional[int] = None,
                 initial_timer: float = 0.0):
        self.field_width = field_width
        self.field_height = field_height
        self.width = obstacle_width
        self.gap_height = gap_height
        self.max_gap_delta = max_gap_delta
        self.rng = np.random.default_rng(seed)
        self.obstacles: List[Obstacle] = []
        self.spawn_timer = initial_timer

    @classmethod
    def from_config(cls, config) -> "ObstacleStream":
        # Primed so the first run spawns an obstacle straight away
        return cls(config.field_width, config.field_height, config.obstacle_width,
                   config.gap_height, config.max_gap_delta, seed=config.seed,
                   initial_timer=config.spawn_interval)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self.obstacles)

    def __len__(self) -> int:
        return len(self.obstacles)

    def gap_range(self, prev_center: float):
        half_gap = self.gap_height / 2
        low = max(half_gap, prev_center - self.max_gap_delta)
        high = min(self.field_height - half_gap, prev_center + self.max_gap_delta)
        return low, high

    def next_gap_center(self) -> float:
        if not self.obstacles:
            return self.field_height / 2
        low, high = self.gap_range(self.obstacles[-1].gap_center)
        if high <= low:
            return low
        return float(self.rng.uniform(low, high))

    def spawn(self) -> Obstacle:
        obstacle = Obstacle(float(self.field_width), self.next_gap_center())
        self.obstacles.append(obstacle)
        logger.debug("Spawned obstacle with gap at %.1f", obstacle.gap_center)
        return obstacle

    def tick(self, dt: float, spawn_interval: float) -> Optional[Obstacle]:
        self.spawn_timer += dt
        if self.spawn_timer >= spawn_interval:
            self.spawn_timer = 0.0
            return self.spawn()
        return None

    def advance(self, dt: float, speed: float):
        for obstacle in self.obstacles:
            obstacle.x -= speed * dt

    def retire_offscreen(self) -> int:
        before = len(self.obstacles)
        self.obstacles = [o for o in self.obstacles if o.x >= -self.width]
        return before - len(self.obstacles)

    def reset(self):
        self.obstacles = []
        self.spawn_timer = 0.0
