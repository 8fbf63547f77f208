from dataclasses import dataclass

# Background scrolls at a fraction of the obstacle speed
BACKGROUND_SPEED_RATIO = 0.2


@dataclass
class DifficultyParameters:
    current_speed: float
    base_speed: float
    max_speed: float
    spawn_interval: float
    initial_spawn_distance: float


class DifficultyController:
    """Ramps obstacle speed up to a cap and keeps spawns evenly spaced"""

    def __init__(self, base_speed: float, max_speed: float, speed_increase: float,
                 spawn_interval: float):
        self.speed_increase = speed_increase
        self.params = DifficultyParameters(
            current_speed=base_speed,
            base_speed=base_speed,
            max_speed=max_speed,
            spawn_interval=spawn_interval,
            initial_spawn_distance=base_speed * spawn_interval,
        )
        self.background_speed = base_speed * BACKGROUND_SPEED_RATIO

    @classmethod
    def from_config(cls, config) -> "DifficultyController":
        return cls(config.base_speed, config.max_speed, config.speed_increase,
                   config.spawn_interval)

    @property
    def speed(self) -> float:
        return self.params.current_speed

    @property
    def spawn_interval(self) -> float:
        return self.params.spawn_interval

    def tick(self, dt: float):
        params = self.params
        params.current_speed = min(params.current_speed + self.speed_increase * dt,
                                   params.max_speed)
        self._derive()

    def reset(self):
        self.params.current_speed = self.params.base_speed
        self._derive()

    def _derive(self):
        params = self.params
        params.spawn_interval = params.initial_spawn_distance / params.current_speed
        self.background_speed = params.current_speed * BACKGROUND_SPEED_RATIO
