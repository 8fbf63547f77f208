import os

import pygame

from .resources import ResourceLoader, draw_background, draw_pipe, draw_player
from .state import SessionState
from .viewport import Viewport

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
YELLOW = (243, 216, 63)
PIPE_CAP_HEIGHT = 24
FONT_SIZE = 28


class Renderer:
    """Draws a session onto a fixed-size field surface and letterboxes it into the window"""

    def __init__(self, screen, config):
        self.screen = screen
        self.config = config
        self.field_size = (config.field_width, config.field_height)
        self.target = pygame.Surface(self.field_size, 0, 32)
        self.viewport = Viewport.fit(screen.get_size(), self.field_size)

        asset_dir = config.asset_dir
        self.background = ResourceLoader.load_image(
            os.path.join(asset_dir, "background.jpg"),
            fallback=lambda: draw_background(config.field_width * 2, config.field_height))
        self.pipe = ResourceLoader.load_image(
            os.path.join(asset_dir, "pipe.png"), fallback=draw_pipe)
        size = int(config.player_size)
        self.player_open = ResourceLoader.load_image(
            os.path.join(asset_dir, "redkat_eyes_open.png"), (size, size),
            fallback=lambda: draw_player(size))
        self.player_closed = ResourceLoader.load_image(
            os.path.join(asset_dir, "redkat_eyes_closed.png"), (size, size),
            fallback=lambda: draw_player(size, eyes_closed=True))

        font_path = os.path.join("Font", "monogram.ttf")
        self.font = pygame.font.Font(font_path if os.path.exists(font_path) else None, FONT_SIZE)

    @property
    def background_width(self):
        return self.background.get_width()

    def resize(self, screen):
        self.screen = screen
        self.viewport = Viewport.fit(screen.get_size(), self.field_size)

    def draw(self, session):
        self.draw_background(session.background_offset)
        for obstacle in session.obstacles:
            self.draw_obstacle(obstacle)
        self.draw_player(session)
        self.draw_ui(session)

        self.screen.fill(BLACK)
        x, y, w, h = self.viewport.target_rect(self.field_size)
        self.screen.blit(pygame.transform.smoothscale(self.target, (w, h)), (x, y))
        pygame.display.flip()

    def draw_background(self, offset):
        field_w, field_h = self.field_size
        bg_w = self.background_width
        src_x = int(offset) % bg_w
        first = min(field_w, bg_w - src_x)
        self.target.blit(self.background, (0, 0), (src_x, 0, first, field_h))
        # Wrap around
        if first < field_w:
            self.target.blit(self.background, (first, 0), (0, 0, field_w - first, field_h))

    def draw_obstacle(self, obstacle):
        config = self.config
        half_gap = config.gap_height / 2
        width = int(config.obstacle_width)
        top_height = obstacle.gap_center - half_gap
        bottom_y = obstacle.gap_center + half_gap
        bottom_height = config.field_height - bottom_y

        pipe_w, pipe_h = self.pipe.get_size()
        cap = pygame.transform.smoothscale(
            self.pipe.subsurface((0, 0, pipe_w, PIPE_CAP_HEIGHT)), (width, PIPE_CAP_HEIGHT))
        body_src = self.pipe.subsurface((0, PIPE_CAP_HEIGHT, pipe_w, pipe_h - PIPE_CAP_HEIGHT))

        if top_height > 0:
            body_height = int(top_height - PIPE_CAP_HEIGHT)
            if body_height > 0:
                body = pygame.transform.smoothscale(body_src, (width, body_height))
                self.target.blit(body, (obstacle.x, 0))
            self.target.blit(pygame.transform.flip(cap, False, True),
                             (obstacle.x, top_height - PIPE_CAP_HEIGHT))
        if bottom_height > 0:
            body_height = int(bottom_height - PIPE_CAP_HEIGHT)
            if body_height > 0:
                body = pygame.transform.smoothscale(body_src, (width, body_height))
                self.target.blit(body, (obstacle.x, bottom_y + PIPE_CAP_HEIGHT))
            self.target.blit(cap, (obstacle.x, bottom_y))

    def draw_player(self, session):
        sprite = self.player_closed if session.eyes_closed else self.player_open
        player = session.player
        self.target.blit(sprite, sprite.get_rect(center=(player.x, player.y)))

    def text(self, message, pos, color=BLACK, align="left"):
        surface = self.font.render(message, True, color)
        rect = surface.get_rect()
        setattr(rect, {"left": "topleft", "right": "topright", "center": "midtop"}[align], pos)
        self.target.blit(surface, rect)

    def panel(self, width, height):
        field_w, field_h = self.field_size
        rect = pygame.Rect(0, 0, width, height)
        rect.center = (field_w // 2, field_h // 2)
        pygame.draw.rect(self.target, BLACK, rect, border_radius=24)
        return rect

    def draw_ui(self, session):
        field_w, field_h = self.field_size
        touch = self.config.capabilities.has_touch
        windowed = self.config.capabilities.has_window_management

        if touch:
            bar = pygame.Surface((field_w, int(self.config.title_bar_height)), pygame.SRCALPHA)
            bar.fill((128, 128, 128, 8))
            self.target.blit(bar, (0, 0))
            self.text("Tap to pause", (field_w // 2, 40), align="center")

        right = field_w - 20
        self.text(f"Score: {session.score.current}", (right, 20), align="right")
        self.text(f"High Score: {session.score.high}", (right, 50), align="right")
        self.text(f"Speed: {int(session.difficulty.speed)}", (right, 80), align="right")
        if not touch:
            self.text("Press M to toggle music", (field_w // 2, field_h - 30), align="center")

        state = session.state
        if state is SessionState.EXIT_CONFIRM:
            rect = self.panel(500, 60)
            self.text("Are you sure you want to exit? [Y/N]", (rect.centerx, rect.top + 16),
                      YELLOW, "center")
        elif state is SessionState.INTRO:
            self.draw_intro(touch, windowed)
        elif state is SessionState.PAUSED:
            rect = self.panel(560, 60)
            if touch:
                message = "Game paused, tap to continue"
            elif windowed:
                message = "Game paused, press P to continue"
            else:
                message = "Game paused, press P or ESC to continue"
            self.text(message, (rect.centerx, rect.top + 16), YELLOW, "center")
        elif state is SessionState.UNFOCUSED_PAUSE:
            rect = self.panel(560, 60)
            self.text("Game paused, focus window to continue", (rect.centerx, rect.top + 16),
                      YELLOW, "center")
        elif state is SessionState.GAME_OVER:
            rect = self.panel(500, 100)
            self.text(f"Game Over! Score: {session.score.current}", (rect.centerx, rect.top + 20),
                      YELLOW, "center")
            again = "Tap to play again" if touch else "Press Enter to play again"
            self.text(again, (rect.centerx, rect.top + 60), YELLOW, "center")

    def draw_intro(self, touch, windowed):
        rect = self.panel(700, 300)
        x = rect.left + 60
        y = rect.top + 20
        self.text("Welcome to Hovercat", (x, y), YELLOW)
        y += 40
        self.text("Controls:", (x, y), YELLOW)
        y += 30
        if touch:
            lines = ["- Tap to flap", "- Tap title bar to pause"]
            start = "Tap to play"
        elif windowed:
            lines = ["- Press [Space], [W] or [Up Arrow] to flap", "- Press [P] to pause",
                     "- Press [Esc] to exit", "- Press [M] to toggle music"]
            start = "Press Enter to play"
        else:
            lines = ["- Press [Space], [W] or [Up Arrow] to flap",
                     "- Press [P] or [ESC] to pause", "- Press [M] to toggle music"]
            start = "Press Enter to play"
        for line in lines:
            self.text(line, (x + 40, y), WHITE)
            y += 30
        y += 10
        self.text(start, (rect.centerx, y), YELLOW, "center")
        if windowed and not touch:
            self.text("Alt+Enter: toggle fullscreen", (rect.centerx, y + 30), YELLOW, "center")
