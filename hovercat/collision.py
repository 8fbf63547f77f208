import numpy as np

from .obstacles import Obstacle
from .physics import PhysicsBody


class CollisionSystem:
    """Hit-tests the player's collision box against the field and obstacle gaps.

    The collision box is centered on the player and is a fraction of the sprite
    size, so grazing a pipe with the sprite's edge doesn't count.
    """

    def __init__(self, player_size: float, width_ratio: float, height_ratio: float,
                 gap_height: float):
        self.box_width = player_size * width_ratio
        self.box_height = player_size * height_ratio
        self.gap_height = gap_height

    @classmethod
    def from_config(cls, config) -> "CollisionSystem":
        return cls(config.player_size, config.collision_width_ratio,
                   config.collision_height_ratio, config.gap_height)

    def box(self, player: PhysicsBody) -> np.ndarray:
        """Return the collision box as ``[left, top, right, bottom]``"""
        half_w = self.box_width / 2
        half_h = self.box_height / 2
        return np.array([player.x - half_w, player.y - half_h,
                         player.x + half_w, player.y + half_h])

    def check_bounds(self, player: PhysicsBody, field_height: float) -> bool:
        _, top, _, bottom = self.box(player)
        return bool(top < 0 or bottom > field_height)

    def check_obstacle(self, player: PhysicsBody, obstacle: Obstacle, obstacle_width: float) -> bool:
        left, top, right, bottom = self.box(player)
        if not (right > obstacle.x and left < obstacle.x + obstacle_width):
            return False
        half_gap = self.gap_height / 2
        return bool(top < obstacle.gap_center - half_gap or
                    bottom > obstacle.gap_center + half_gap)
