#!/usr/bin/env python3

import logging
import os
import sys

import pygame

from .audio import SoundManager
from .config import Config
from .errors import ConfigError
from .input import TouchInputMapper, create_input_mapper
from .log import setup_logging
from .profiler import Profiler
from .render import Renderer
from .session import Session
from .signals import Signal

logger = logging.getLogger(__name__)

TITLE = "Hovercat"
CONFIG_ENV = "HOVERCAT_CONFIG"
DEFAULT_CONFIG = "config.yaml"


class Game:
    def __init__(self, config: Config):
        self.config = config
        self.fullscreen = False
        try:
            pygame.init()
            self.screen = pygame.display.set_mode(
                (config.field_width, config.field_height), pygame.RESIZABLE)
            pygame.display.set_caption(TITLE)
            self.clock = pygame.time.Clock()

            self.profiler = Profiler()
            self.audio = SoundManager.create(config)
            self.renderer = Renderer(self.screen, config)
            config.background_width = self.renderer.background_width
            self.input = create_input_mapper(config.capabilities, config.title_bar_height)
            self.session = Session(config, self.audio)
        except Exception:
            logger.exception("Error initializing game")
            self.cleanup()
            sys.exit(1)

    def handle_events(self):
        if isinstance(self.input, TouchInputMapper):
            self.input.window_size = self.screen.get_size()
            self.input.viewport = self.renderer.viewport

        signals = []
        for event in pygame.event.get():
            if event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.get_surface()
                self.renderer.resize(self.screen)
                continue
            for signal in self.input.translate(event, self.session.state):
                if signal is Signal.FULLSCREEN_TOGGLE:
                    self.toggle_fullscreen()
                else:
                    signals.append(signal)
        return signals

    def toggle_fullscreen(self):
        self.fullscreen = not self.fullscreen
        pygame.display.toggle_fullscreen()
        self.screen = pygame.display.get_surface()
        self.renderer.resize(self.screen)

    def update(self, dt, signals):
        with self.profiler.profile_scope("update"):
            self.session.tick(dt, signals, focused=pygame.key.get_focused())

    def draw(self):
        with self.profiler.profile_scope("render"):
            self.renderer.draw(self.session)

    def run(self):
        while not self.session.exit_confirmed:
            dt = self.clock.tick(self.config.fps) / 1000.0
            signals = self.handle_events()
            self.update(dt, signals)
            self.draw()
            self.profiler.sample_memory()
        logger.debug("Profile: %s", self.profiler.summary())
        self.cleanup()

    def cleanup(self):
        audio = getattr(self, 'audio', None)
        if audio is not None:
            audio.shutdown()
        pygame.quit()


def main():
    try:
        config = Config.load_from_file(os.environ.get(CONFIG_ENV, DEFAULT_CONFIG))
    except ConfigError as e:
        setup_logging()
        logger.error("%s", e)
        return 1
    setup_logging(config.log_level)

    Game(config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
