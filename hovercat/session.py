import logging
from typing import Iterable, Optional

from .collision import CollisionSystem
from .config import Config
from .difficulty import DifficultyController
from .obstacles import ObstacleStream
from .physics import PhysicsBody
from .score import HighScoreStore, ScoreKeeper
from .signals import Signal
from .state import SessionState, SessionStateMachine

logger = logging.getLogger(__name__)

PAUSE_STATES = (SessionState.PAUSED, SessionState.UNFOCUSED_PAUSE, SessionState.EXIT_CONFIRM)


class Session:
    """One play session: the world, its rules, and the mode it is in.

    The application shell calls ``tick`` once per frame with the frame delta,
    the semantic signals collected for the frame, and whether the window has
    focus. Everything runs synchronously inside that call.
    """

    def __init__(self, config: Config, audio, store: Optional[HighScoreStore] = None):
        self.config = config
        self.audio = audio

        self.player = PhysicsBody(*config.player_start)
        self.obstacles = ObstacleStream.from_config(config)
        self.difficulty = DifficultyController.from_config(config)
        self.collisions = CollisionSystem.from_config(config)
        self.score = ScoreKeeper(store or HighScoreStore(config.high_score_path))

        self.machine = SessionStateMachine(config.game_over_delay)
        self.machine.add_listener(self.on_transition)

        self.music_playing = False
        self.music_disabled = False
        self.eyes_closed_timer = 0.0
        self.background_offset = 0.0
        self.just_reset = False

    @property
    def state(self) -> SessionState:
        return self.machine.state

    @property
    def exit_confirmed(self) -> bool:
        return self.machine.exit_confirmed

    @property
    def eyes_closed(self) -> bool:
        return self.state is SessionState.GAME_OVER or self.eyes_closed_timer > 0.0

    def tick(self, dt: float, signals: Iterable[Signal] = (), focused: bool = True):
        self.just_reset = False
        self.machine.update_focus(focused)
        for signal in signals:
            self.handle_signal(signal, dt)

        # Nothing time-dependent happens on an empty frame
        if dt <= 0:
            return

        self.machine.countdown(dt)
        # A restart shows the fresh world for one frame before it moves
        if self.machine.running and not self.just_reset:
            self.simulate(dt)

    def handle_signal(self, signal: Signal, dt: float):
        if self.machine.dispatch(signal, dt):
            return
        if not self.machine.running:
            return
        if signal is Signal.FLAP and dt > 0:
            self.flap()
        elif signal is Signal.MUSIC_TOGGLE:
            self.toggle_music()

    def flap(self):
        self.player.apply_impulse(self.config.jump_force)
        self.audio.play_flap()
        self.eyes_closed_timer = self.config.eyes_closed_duration

    def toggle_music(self):
        if self.music_playing:
            self.audio.pause_music()
            self.music_playing = False
            self.music_disabled = True
        else:
            self.audio.start_music()
            self.music_playing = True
            self.music_disabled = False

    def simulate(self, dt: float):
        config = self.config

        self.background_offset += self.difficulty.background_speed * dt
        if self.background_offset >= config.background_width:
            self.background_offset -= config.background_width

        self.difficulty.tick(dt)
        self.player.integrate(dt, config.gravity)

        if self.collisions.check_bounds(self.player, config.field_height):
            self.collide()

        self.obstacles.tick(dt, self.difficulty.spawn_interval)
        self.obstacles.advance(dt, self.difficulty.speed)
        for obstacle in self.obstacles:
            if self.score.maybe_score(self.player, obstacle, config.obstacle_width):
                self.audio.play_score()
            if self.state is not SessionState.GAME_OVER and \
                    self.collisions.check_obstacle(self.player, obstacle, config.obstacle_width):
                self.collide()
        self.obstacles.retire_offscreen()

        if self.eyes_closed_timer > 0.0:
            self.eyes_closed_timer = max(0.0, self.eyes_closed_timer - dt)

    def collide(self):
        if not self.machine.end_game():
            return
        self.audio.stop_music()
        self.audio.stop_effects()
        self.audio.play_hit()
        if self.score.record_if_high():
            logger.info("New high score: %d", self.score.high)
        logger.info("Game over with score %d", self.score.current)

    def reset(self):
        self.player.place(*self.config.player_start)
        self.obstacles.reset()
        self.difficulty.reset()
        self.score.reset()
        self.eyes_closed_timer = 0.0
        self.just_reset = True

    def on_transition(self, source: SessionState, target: SessionState):
        if source is SessionState.INTRO and target is SessionState.RUNNING:
            self.start_music()
        elif source is SessionState.GAME_OVER and target is SessionState.RUNNING:
            self.reset()
            self.start_music()
        elif source is SessionState.RUNNING and target in PAUSE_STATES:
            if self.music_playing:
                self.audio.pause_music()
        elif source in PAUSE_STATES and target is SessionState.RUNNING:
            if self.music_playing:
                self.audio.resume_music()

    def start_music(self):
        if self.music_disabled:
            return
        self.audio.start_music()
        self.music_playing = True
