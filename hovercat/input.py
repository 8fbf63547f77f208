from typing import List, Tuple

import pygame

from .config import Capabilities
from .signals import Signal
from .state import SessionState
from .viewport import Viewport

FLAP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_y)


class InputMapper:
    """Turns raw pygame events into semantic signals"""

    def __init__(self, capabilities: Capabilities):
        self.capabilities = capabilities

    def translate(self, event: pygame.event.Event, state: SessionState) -> List[Signal]:
        raise NotImplementedError

    def collect(self, events, state: SessionState) -> List[Signal]:
        signals = []
        for event in events:
            signals.extend(self.translate(event, state))
        return signals


class KeyboardInputMapper(InputMapper):
    def translate(self, event, state):
        windowed = self.capabilities.has_window_management
        if event.type == pygame.QUIT:
            return [Signal.EXIT_REQUEST] if windowed else []
        if event.type != pygame.KEYDOWN:
            return []

        key = event.key
        if key in (pygame.K_RETURN, pygame.K_KP_ENTER) and windowed \
                and getattr(event, 'mod', 0) & pygame.KMOD_ALT:
            return [Signal.FULLSCREEN_TOGGLE]
        if key in FLAP_KEYS:
            return [Signal.FLAP]
        if key in CONFIRM_KEYS:
            return [Signal.CONFIRM]
        if key == pygame.K_n:
            return [Signal.CANCEL]
        if key == pygame.K_p:
            return [Signal.PAUSE_TOGGLE]
        if key == pygame.K_m:
            return [Signal.MUSIC_TOGGLE]
        if key == pygame.K_ESCAPE:
            # Without a window to close, Escape pauses
            return [Signal.EXIT_REQUEST] if windowed else [Signal.PAUSE_TOGGLE]
        return []


class TouchInputMapper(KeyboardInputMapper):
    """Keyboard mapping plus taps. A tap's meaning depends on the session state."""

    def __init__(self, capabilities: Capabilities, title_bar_height: float = 100.0):
        super().__init__(capabilities)
        self.title_bar_height = title_bar_height
        self.window_size: Tuple[int, int] = (1, 1)
        self.viewport = Viewport(1.0, 0.0, 0.0)

    def tap_position(self, event):
        if event.type == pygame.FINGERDOWN:
            width, height = self.window_size
            return event.x * width, event.y * height
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 \
                and not getattr(event, 'touch', False):
            return event.pos
        return None

    def translate(self, event, state):
        pos = self.tap_position(event)
        if pos is None:
            return super().translate(event, state)
        return self.tap(self.viewport.to_field(pos), state)

    def tap(self, pos, state):
        if state in (SessionState.INTRO, SessionState.GAME_OVER):
            return [Signal.CONFIRM]
        if state is SessionState.PAUSED:
            return [Signal.PAUSE_TOGGLE]
        if state is SessionState.RUNNING:
            if 0 <= pos[1] < self.title_bar_height:
                return [Signal.PAUSE_TOGGLE]
            return [Signal.FLAP]
        return []


def create_input_mapper(capabilities: Capabilities, title_bar_height: float = 100.0) -> InputMapper:
    if capabilities.has_touch:
        return TouchInputMapper(capabilities, title_bar_height)
    return KeyboardInputMapper(capabilities)
