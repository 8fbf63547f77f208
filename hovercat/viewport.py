from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Viewport:
    """Letterbox placement of the fixed-size field inside the window"""
    scale: float
    offset_x: float
    offset_y: float

    @classmethod
    def fit(cls, window_size: Tuple[int, int], field_size: Tuple[int, int]) -> "Viewport":
        window_w, window_h = window_size
        field_w, field_h = field_size
        scale = min(window_w / field_w, window_h / field_h)
        return cls(scale,
                   (window_w - field_w * scale) * 0.5,
                   (window_h - field_h * scale) * 0.5)

    def to_field(self, pos: Tuple[float, float]) -> Tuple[float, float]:
        x, y = pos
        return (x - self.offset_x) / self.scale, (y - self.offset_y) / self.scale

    def target_rect(self, field_size: Tuple[int, int]) -> Tuple[int, int, int, int]:
        field_w, field_h = field_size
        return (int(self.offset_x), int(self.offset_y),
                int(field_w * self.scale), int(field_h * self.scale))
