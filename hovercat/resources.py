import logging
import os

import pygame

logger = logging.getLogger(__name__)

CAT_RED = (200, 60, 50)
CAT_DARK = (40, 20, 20)
PIPE_GREEN = (99, 201, 70)
PIPE_DARK_GREEN = (89, 178, 62)
SKY_BLUE = (138, 202, 234)
DEEP_BLUE = (69, 146, 196)


class ResourceLoader:
    @staticmethod
    def load_image(path, scale_size=None, fallback=None):
        """Load an image, or draw a stand-in with ``fallback`` when the file is missing.

        A file that exists but can't be decoded is an error.
        """
        if not os.path.exists(path):
            if fallback is None:
                raise FileNotFoundError(path)
            logger.info("Image %s not found, drawing a placeholder", path)
            return fallback()
        image = pygame.image.load(path)
        if scale_size:
            return pygame.transform.smoothscale(image, scale_size)
        return image


def draw_player(size, eyes_closed=False):
    size = int(size)
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.ellipse(surface, CAT_RED, (size * 0.1, size * 0.2, size * 0.8, size * 0.65))
    # Ears
    pygame.draw.polygon(surface, CAT_RED, [(size * 0.2, size * 0.3), (size * 0.3, size * 0.05),
                                           (size * 0.42, size * 0.25)])
    pygame.draw.polygon(surface, CAT_RED, [(size * 0.58, size * 0.25), (size * 0.7, size * 0.05),
                                           (size * 0.8, size * 0.3)])
    for eye_x in (0.38, 0.62):
        center = (int(size * eye_x), int(size * 0.45))
        if eyes_closed:
            pygame.draw.line(surface, CAT_DARK, (center[0] - size * 0.06, center[1]),
                             (center[0] + size * 0.06, center[1]), max(2, size // 30))
        else:
            pygame.draw.circle(surface, CAT_DARK, center, max(2, size // 14))
    return surface


def draw_pipe(width=64, height=320, cap_height=24):
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(surface, PIPE_GREEN, (4, cap_height, width - 8, height - cap_height))
    pygame.draw.rect(surface, PIPE_DARK_GREEN, (0, 0, width, cap_height), border_radius=6)
    return surface


def draw_background(width, height):
    surface = pygame.Surface((int(width), int(height)))
    surface.fill(SKY_BLUE)
    for x in range(0, int(width), 160):
        pygame.draw.circle(surface, DEEP_BLUE, (x + 80, int(height)), 120)
    return surface
