import logging
from enum import Enum, auto
from typing import Callable, Dict, FrozenSet, List, Optional

from .errors import InvalidTransition
from .signals import Signal

logger = logging.getLogger(__name__)


class SessionState(Enum):
    INTRO = auto()
    RUNNING = auto()
    PAUSED = auto()
    UNFOCUSED_PAUSE = auto()
    EXIT_CONFIRM = auto()
    GAME_OVER = auto()


_MODAL_SOURCES = frozenset({
    SessionState.INTRO,
    SessionState.RUNNING,
    SessionState.PAUSED,
    SessionState.UNFOCUSED_PAUSE,
    SessionState.GAME_OVER,
})

TRANSITIONS: Dict[SessionState, FrozenSet[SessionState]] = {
    SessionState.INTRO: frozenset({SessionState.RUNNING, SessionState.EXIT_CONFIRM}),
    SessionState.RUNNING: frozenset({
        SessionState.PAUSED,
        SessionState.UNFOCUSED_PAUSE,
        SessionState.EXIT_CONFIRM,
        SessionState.GAME_OVER,
    }),
    SessionState.PAUSED: frozenset({SessionState.RUNNING, SessionState.EXIT_CONFIRM}),
    SessionState.UNFOCUSED_PAUSE: frozenset({SessionState.RUNNING, SessionState.EXIT_CONFIRM}),
    SessionState.EXIT_CONFIRM: _MODAL_SOURCES,
    SessionState.GAME_OVER: frozenset({SessionState.RUNNING, SessionState.EXIT_CONFIRM}),
}

Listener = Callable[[SessionState, SessionState], None]


class SessionStateMachine:
    """Single source of truth for which mode the session is in.

    Every input signal is dispatched to the handler of the current state; the
    handler decides whether it causes a transition. Listeners are notified
    after each transition with ``(old, new)`` and carry out side effects such
    as starting music or resetting the world.
    """

    def __init__(self, lockout_duration: float = 0.0):
        self.state = SessionState.INTRO
        self.lockout_duration = lockout_duration
        self.lockout_remaining = 0.0
        self.exit_confirmed = False
        self.resume_state: Optional[SessionState] = None
        self.listeners: List[Listener] = []
        self.state_handlers = {
            SessionState.INTRO: self.handle_intro,
            SessionState.RUNNING: self.handle_running,
            SessionState.PAUSED: self.handle_paused,
            SessionState.UNFOCUSED_PAUSE: self.handle_unfocused,
            SessionState.EXIT_CONFIRM: self.handle_exit_confirm,
            SessionState.GAME_OVER: self.handle_game_over,
        }

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    @property
    def can_restart(self) -> bool:
        return self.state is SessionState.GAME_OVER and self.lockout_remaining <= 0.0

    def add_listener(self, listener: Listener):
        self.listeners.append(listener)

    def transition(self, target: SessionState):
        source = self.state
        if target not in TRANSITIONS[source]:
            raise InvalidTransition(source, target)
        self.state = target
        logger.info("Session %s -> %s", source.name, target.name)
        for listener in self.listeners:
            listener(source, target)

    def dispatch(self, signal: Signal, dt: float) -> bool:
        """Feed one signal to the current state. Returns True if it was consumed."""
        return self.state_handlers[self.state](signal, dt)

    def update_focus(self, focused: bool):
        if not focused and self.state is SessionState.RUNNING:
            self.transition(SessionState.UNFOCUSED_PAUSE)
        elif focused and self.state is SessionState.UNFOCUSED_PAUSE:
            self.transition(SessionState.RUNNING)

    def end_game(self) -> bool:
        """Enter GAME_OVER from RUNNING. A second call in the same run is a no-op."""
        if self.state is not SessionState.RUNNING:
            return False
        self.lockout_remaining = self.lockout_duration
        self.transition(SessionState.GAME_OVER)
        return True

    def countdown(self, dt: float):
        if self.state is SessionState.GAME_OVER and self.lockout_remaining > 0.0:
            self.lockout_remaining = max(0.0, self.lockout_remaining - dt)

    def request_exit(self):
        self.resume_state = self.state
        self.transition(SessionState.EXIT_CONFIRM)

    def handle_intro(self, signal: Signal, dt: float) -> bool:
        if signal is Signal.CONFIRM:
            self.transition(SessionState.RUNNING)
            return True
        if signal is Signal.EXIT_REQUEST:
            self.request_exit()
            return True
        return False

    def handle_running(self, signal: Signal, dt: float) -> bool:
        if signal is Signal.PAUSE_TOGGLE:
            self.transition(SessionState.PAUSED)
            return True
        if signal is Signal.EXIT_REQUEST:
            self.request_exit()
            return True
        return False

    def handle_paused(self, signal: Signal, dt: float) -> bool:
        if signal is Signal.PAUSE_TOGGLE:
            self.transition(SessionState.RUNNING)
            return True
        if signal is Signal.EXIT_REQUEST:
            self.request_exit()
            return True
        return False

    def handle_unfocused(self, signal: Signal, dt: float) -> bool:
        if signal is Signal.EXIT_REQUEST:
            self.request_exit()
            return True
        return False

    def handle_exit_confirm(self, signal: Signal, dt: float) -> bool:
        if signal is Signal.CONFIRM:
            self.exit_confirmed = True
            logger.info("Exit confirmed")
            return True
        if signal in (Signal.CANCEL, Signal.EXIT_REQUEST):
            target = self.resume_state or SessionState.RUNNING
            self.resume_state = None
            self.transition(target)
            return True
        return False

    def handle_game_over(self, signal: Signal, dt: float) -> bool:
        # Restart resets the world, so it needs a real tick behind it
        if signal is Signal.CONFIRM and dt > 0 and self.can_restart:
            self.transition(SessionState.RUNNING)
            return True
        if signal is Signal.EXIT_REQUEST:
            self.request_exit()
            return True
        return False
