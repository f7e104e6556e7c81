"""
Simulator - Per-frame motion update for every grid point

Each point combines:
- Noise drift: the noise field picks a direction, the point sits on an
  ellipse of radius (wave_amp_x, wave_amp_y) around its base position
- Ambient wave: cheap sinusoids of time and position layered on top
- Cursor spring: impulses from nearby pointer motion, pulled back to zero
  by tension and damped by friction, clamped to max_cursor_move

The whole lattice is updated with array operations, one noise evaluation
per point per frame.
"""

import numpy as np

from flowlines.config import FlowConfig
from .grid import Grid
from .noise import NoiseField
from .pointer import PointerTracker


class Simulator:
    """Advances grid motion state by one frame."""

    def __init__(self, config: FlowConfig, noise: NoiseField):
        self._config = config
        self._noise = noise

    def step(self, grid: Grid, pointer: PointerTracker, time_ms: float) -> None:
        """Update wave and cursor offsets of every point in ``grid``."""
        if grid.is_empty:
            return

        self._update_waves(grid, time_ms)
        self._update_cursor(grid, pointer)

    def _update_waves(self, grid: Grid, t: float) -> None:
        c = self._config

        move = self._noise.sample(
            (grid.base_x + t * c.wave_speed_x) * c.noise_frequency,
            (grid.base_y + t * c.wave_speed_y) * c.noise_frequency,
        ) * c.noise_angle_scale

        phase = t * c.ambient_wave_speed
        ambient_x = np.sin(phase + grid.base_x * c.ambient_wave_frequency) * c.ambient_wave_intensity
        ambient_y = np.cos(phase + grid.base_y * c.ambient_wave_frequency) * c.ambient_wave_intensity

        grid.wave_x[...] = np.cos(move) * c.wave_amp_x + ambient_x
        grid.wave_y[...] = np.sin(move) * c.wave_amp_y + ambient_y

    def _update_cursor(self, grid: Grid, pointer: PointerTracker) -> None:
        c = self._config
        sx, sy = pointer.smoothed_position
        vs = pointer.smoothed_speed
        angle = pointer.angle

        radius = max(c.min_interaction_radius, vs)
        if radius > 0:
            dist = np.hypot(grid.base_x - sx, grid.base_y - sy)

            # Impulse along the pointer's direction, cosine falloff inside the radius
            inside = dist < radius
            falloff = np.cos(dist * c.cursor_falloff_frequency) * (1 - dist / radius)
            strength = np.where(inside, falloff * radius * vs * c.cursor_force, 0.0)
            grid.cursor_vx += np.cos(angle) * strength
            grid.cursor_vy += np.sin(angle) * strength

        # Spring back to rest, then damp
        grid.cursor_vx += -grid.cursor_x * c.tension
        grid.cursor_vy += -grid.cursor_y * c.tension
        grid.cursor_vx *= c.friction
        grid.cursor_vy *= c.friction

        grid.cursor_x += grid.cursor_vx
        grid.cursor_y += grid.cursor_vy
        np.clip(grid.cursor_x, -c.max_cursor_move, c.max_cursor_move, out=grid.cursor_x)
        np.clip(grid.cursor_y, -c.max_cursor_move, c.max_cursor_move, out=grid.cursor_y)
