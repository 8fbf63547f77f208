"""Hovercat: a side-scrolling gap-obstacle arcade game built on pygame."""

from .config import Capabilities, Config
from .session import Session
from .signals import Signal
from .state import SessionState

__version__ = "1.0.0"

__all__ = ["Capabilities", "Config", "Session", "SessionState", "Signal"]
