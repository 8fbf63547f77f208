from enum import Enum, auto


class Signal(Enum):
    """Semantic input consumed by the session, independent of the device"""
    FLAP = auto()
    PAUSE_TOGGLE = auto()
    CONFIRM = auto()
    CANCEL = auto()
    MUSIC_TOGGLE = auto()
    EXIT_REQUEST = auto()
    FULLSCREEN_TOGGLE = auto()
