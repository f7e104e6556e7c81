"""
Grid - Lattice of simulated points

Point state is held structure-of-arrays: one numpy array per attribute,
shaped (columns, rows). Column i is one drawn line, row j runs top to
bottom along it.

The lattice covers the surface plus a padding margin so edge motion never
exposes empty space, and is centred on the visible area.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from flowlines.config import GRID_PADDING_X, GRID_PADDING_Y


@dataclass(frozen=True)
class Point:
    """Snapshot of one lattice node (for inspection and tests)."""
    base_x: float
    base_y: float
    wave_x: float = 0.0
    wave_y: float = 0.0
    cursor_x: float = 0.0
    cursor_y: float = 0.0
    cursor_vx: float = 0.0
    cursor_vy: float = 0.0


class Grid:
    """
    Point lattice with per-point motion state.

    Never resized in place; build a new one with Grid.rebuild().
    """

    def __init__(self, base_x: np.ndarray, base_y: np.ndarray):
        if base_x.shape != base_y.shape:
            raise ValueError(f"base arrays differ in shape: {base_x.shape} vs {base_y.shape}")
        self.base_x = base_x
        self.base_y = base_y

        # Recomputed from noise every frame
        self.wave_x = np.zeros_like(base_x)
        self.wave_y = np.zeros_like(base_x)

        # Spring integrator state, persists between frames
        self.cursor_x = np.zeros_like(base_x)
        self.cursor_y = np.zeros_like(base_x)
        self.cursor_vx = np.zeros_like(base_x)
        self.cursor_vy = np.zeros_like(base_x)

    @classmethod
    def empty(cls) -> "Grid":
        return cls(np.zeros((0, 0)), np.zeros((0, 0)))

    @classmethod
    def rebuild(cls, width: float, height: float, x_gap: float, y_gap: float,
                padding_x: float = GRID_PADDING_X,
                padding_y: float = GRID_PADDING_Y) -> "Grid":
        """
        Build a fresh lattice for a surface of width x height.

        Non-positive gaps or a zero-sized surface give an empty grid.
        """
        if x_gap <= 0 or y_gap <= 0 or width <= 0 or height <= 0:
            return cls.empty()

        total_lines = math.ceil((width + padding_x) / x_gap)
        total_points = math.ceil((height + padding_y) / y_gap)
        x_start = (width - x_gap * total_lines) / 2
        y_start = (height - y_gap * total_points) / 2

        xs = x_start + x_gap * np.arange(total_lines + 1, dtype=np.float64)
        ys = y_start + y_gap * np.arange(total_points + 1, dtype=np.float64)
        base_x, base_y = np.meshgrid(xs, ys, indexing='ij')
        return cls(base_x, base_y)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.base_x.shape

    @property
    def columns(self) -> int:
        return self.base_x.shape[0]

    @property
    def rows(self) -> int:
        """Points per column (0 for an empty grid)."""
        if self.columns == 0:
            return 0
        return self.base_x.shape[1]

    @property
    def is_empty(self) -> bool:
        return self.base_x.size == 0

    def __len__(self) -> int:
        return self.columns

    def point(self, col: int, row: int) -> Point:
        return Point(
            base_x=float(self.base_x[col, row]),
            base_y=float(self.base_y[col, row]),
            wave_x=float(self.wave_x[col, row]),
            wave_y=float(self.wave_y[col, row]),
            cursor_x=float(self.cursor_x[col, row]),
            cursor_y=float(self.cursor_y[col, row]),
            cursor_vx=float(self.cursor_vx[col, row]),
            cursor_vy=float(self.cursor_vy[col, row]),
        )

    def displaced(self, with_cursor: bool = True) -> Tuple[np.ndarray, np.ndarray]:
        """Drawn positions: base + wave (+ cursor)."""
        x = self.base_x + self.wave_x
        y = self.base_y + self.wave_y
        if with_cursor:
            x = x + self.cursor_x
            y = y + self.cursor_y
        return x, y
