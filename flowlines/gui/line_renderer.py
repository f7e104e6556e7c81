"""
Line Renderer
Draws each grid column as one polyline onto a QImage surface.
"""

from typing import TYPE_CHECKING, List, Tuple

import numpy as np
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QImage, QPainter, QPainterPath, QPen

from flowlines.config import FlowConfig

if TYPE_CHECKING:
    from flowlines.field.grid import Grid


PathCommand = Tuple[str, float, float]  # ("M" | "L", x, y)

MOVE = "M"
LINE = "L"


def _round1(values: np.ndarray) -> np.ndarray:
    # Round half up, np.round would round half to even
    return np.floor(values * 10 + 0.5) / 10


class LineRenderer:
    """
    Builds and strokes the column paths.

    The last point of every column is drawn without its cursor offset and
    the path then jumps to it again, so consecutive columns never get
    joined by a stray segment.
    """

    def __init__(self, config: FlowConfig):
        self._config = config
        self._pen = QPen(self.line_qcolor())
        self._pen.setWidthF(config.line_width)
        self._pen.setCosmetic(True)

    def line_qcolor(self) -> QColor:
        r, g, b = self._config.line_color
        color = QColor(r, g, b)
        color.setAlphaF(max(0.0, min(1.0, self._config.line_opacity)))
        return color

    def build_paths(self, grid: "Grid") -> List[List[PathCommand]]:
        """Per-column move/line commands, coordinates rounded to 0.1."""
        if grid.is_empty:
            return []

        full_x, full_y = (_round1(a) for a in grid.displaced(with_cursor=True))
        wave_x, wave_y = (_round1(a) for a in grid.displaced(with_cursor=False))
        last = grid.rows - 1

        paths = []
        for i in range(grid.columns):
            cmds: List[PathCommand] = [(MOVE, float(wave_x[i, 0]), float(wave_y[i, 0]))]
            for j in range(last):
                cmds.append((LINE, float(full_x[i, j]), float(full_y[i, j])))
            end = (float(wave_x[i, last]), float(wave_y[i, last]))
            cmds.append((LINE,) + end)
            cmds.append((MOVE,) + end)
            paths.append(cmds)
        return paths

    def build_painter_path(self, grid: "Grid") -> QPainterPath:
        path = QPainterPath()
        for cmds in self.build_paths(grid):
            for op, x, y in cmds:
                if op == MOVE:
                    path.moveTo(x, y)
                else:
                    path.lineTo(x, y)
        return path

    def render(self, surface: QImage, grid: "Grid") -> None:
        """Clear the whole surface, then stroke every column."""
        surface.fill(Qt.transparent)
        if grid.is_empty or surface.isNull():
            return

        painter = QPainter(surface)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            painter.setPen(self._pen)
            painter.setBrush(Qt.NoBrush)
            painter.drawPath(self.build_painter_path(grid))
        finally:
            painter.end()
