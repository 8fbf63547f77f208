import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from hovercat.config import Config
from hovercat.score import HighScoreStore
from hovercat.session import Session


class RecordingAudio:
    """Collects every audio call the session makes"""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        return lambda: self.calls.append(name)

    def count(self, name):
        return self.calls.count(name)


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def score_path(tmp_path):
    return str(tmp_path / "highscore.txt")


@pytest.fixture
def make_session(audio, score_path):
    def factory(**overrides):
        overrides.setdefault("seed", 1234)
        overrides.setdefault("high_score_path", score_path)
        config = Config.from_dict(overrides)
        return Session(config, audio, HighScoreStore(config.high_score_path))
    return factory
