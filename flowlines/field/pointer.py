"""
Pointer Tracker - Smoothed pointer position, speed and direction

Input events only record the latest raw position. advance() runs once per
simulated frame and derives velocity from frame-to-frame displacement, so
any number of events inside one frame coalesce to the last one.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from flowlines.config import MAX_POINTER_SPEED, POINTER_SMOOTHING, POINTER_START


@dataclass
class PointerState:
    """Raw, smoothed and previous-frame pointer values."""
    x: float = POINTER_START[0]
    y: float = POINTER_START[1]
    sx: float = 0.0   # Smoothed follower
    sy: float = 0.0
    lx: float = 0.0   # Raw position at the previous frame
    ly: float = 0.0
    speed: float = 0.0
    smoothed_speed: float = 0.0
    angle: float = 0.0
    initialized: bool = False


class PointerTracker:
    """Turns raw pointer events into signals for the simulator."""

    def __init__(self, smoothing: float = POINTER_SMOOTHING,
                 max_speed: float = MAX_POINTER_SPEED):
        self._smoothing = smoothing
        self._max_speed = max_speed
        self.state = PointerState()

    @property
    def position(self) -> Tuple[float, float]:
        return self.state.x, self.state.y

    @property
    def smoothed_position(self) -> Tuple[float, float]:
        return self.state.sx, self.state.sy

    @property
    def speed(self) -> float:
        return self.state.speed

    @property
    def smoothed_speed(self) -> float:
        return self.state.smoothed_speed

    @property
    def angle(self) -> float:
        return self.state.angle

    @property
    def initialized(self) -> bool:
        return self.state.initialized

    def on_input(self, abs_x: float, abs_y: float,
                 origin: Tuple[float, float] = (0.0, 0.0)) -> None:
        """Record a pointer event given in absolute coordinates."""
        s = self.state
        s.x = abs_x - origin[0]
        s.y = abs_y - origin[1]

        # First event: start the follower where the pointer is, not at (0, 0)
        if not s.initialized:
            s.sx = s.x
            s.sy = s.y
            s.lx = s.x
            s.ly = s.y
            s.initialized = True

    def advance(self) -> None:
        """Step smoothing and velocity by one frame."""
        s = self.state
        k = self._smoothing

        s.sx += (s.x - s.sx) * k
        s.sy += (s.y - s.sy) * k

        dx = s.x - s.lx
        dy = s.y - s.ly
        d = math.hypot(dx, dy)
        s.speed = d
        s.smoothed_speed += (d - s.smoothed_speed) * k
        s.smoothed_speed = min(self._max_speed, s.smoothed_speed)
        s.lx = s.x
        s.ly = s.y
        s.angle = math.atan2(dy, dx)

    def reset_motion(self) -> None:
        """Drop velocity after a layout change. The smoothed follower is kept."""
        s = self.state
        s.lx = s.x
        s.ly = s.y
        s.speed = 0.0
        s.smoothed_speed = 0.0
