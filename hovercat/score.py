import logging
import os
from typing import Optional

from .obstacles import Obstacle
from .physics import PhysicsBody

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Keeps the high score as a single decimal integer in a text file.

    Without a path nothing is persisted. Anything unreadable loads as 0.
    """

    def __init__(self, path: Optional[str]):
        self.path = path

    def load(self) -> int:
        if self.path is None or not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, 'r') as f:
                value = int(f.read().strip() or 0)
        except (OSError, ValueError) as e:
            logger.warning("Couldn't read high score from %s: %s", self.path, e)
            return 0
        return max(value, 0)

    def save(self, value: int):
        if self.path is None:
            return
        try:
            with open(self.path, 'w') as f:
                f.write(str(value))
        except OSError as e:
            logger.warning("Couldn't save high score to %s: %s", self.path, e)


class ScoreKeeper:
    def __init__(self, store: HighScoreStore):
        self.store = store
        self.current = 0
        self.high = store.load()

    def maybe_score(self, player: PhysicsBody, obstacle: Obstacle, obstacle_width: float) -> bool:
        """Award a point the first time the player is past the obstacle's trailing edge"""
        if obstacle.scored or player.x <= obstacle.x + obstacle_width:
            return False
        obstacle.scored = True
        self.current += 1
        self.record_if_high()
        return True

    def record_if_high(self) -> bool:
        if self.current <= self.high:
            return False
        self.high = self.current
        self.store.save(self.high)
        logger.debug("New high score %d", self.high)
        return True

    def reset(self):
        self.current = 0
