"""
Tests for the line renderer.

Covers:
- Path commands per column (last point drawn without cursor offset)
- One-decimal rounding
- Clearing and stroking the QImage surface
"""

import numpy as np
import pytest

from flowlines.config import FlowConfig
from flowlines.field.grid import Grid
from flowlines.gui.line_renderer import LINE, MOVE, LineRenderer


@pytest.fixture
def renderer(qapp):
    return LineRenderer(FlowConfig(seed=1))


@pytest.fixture
def small_grid():
    """3 columns x 4 points with distinct wave and cursor offsets."""
    grid = Grid.rebuild(20, 30, 10, 10, padding_x=0, padding_y=0)
    grid.wave_x[:] = 1.0
    grid.wave_y[:] = 2.0
    grid.cursor_x[:] = 5.0
    grid.cursor_y[:] = -5.0
    return grid


def surface_has_ink(image, rows=None):
    rows = rows if rows is not None else range(0, image.height(), 7)
    for y in rows:
        for x in range(image.width()):
            if image.pixelColor(x, y).alpha() > 0:
                return True
    return False


class TestBuildPaths:
    """Move/line command generation."""

    def test_one_path_per_column(self, renderer, small_grid):
        paths = renderer.build_paths(small_grid)
        assert len(paths) == small_grid.columns

    def test_command_layout(self, renderer, small_grid):
        """M(first, no cursor), L(every point), M(last, no cursor)."""
        rows = small_grid.rows
        for cmds in renderer.build_paths(small_grid):
            ops = [c[0] for c in cmds]
            assert ops == [MOVE] + [LINE] * rows + [MOVE]

    def test_displacement_rules(self, renderer, small_grid):
        grid = small_grid
        cmds = renderer.build_paths(grid)[1]
        bx = grid.base_x[1]
        by = grid.base_y[1]

        # Path starts at the first point without cursor offset
        assert cmds[0][1:] == pytest.approx((bx[0] + 1.0, by[0] + 2.0))
        # Intermediate points carry the full offset
        for j in range(grid.rows - 1):
            assert cmds[1 + j][1:] == pytest.approx((bx[j] + 6.0, by[j] - 3.0))
        # Last point closes without cursor offset, then the path restarts there
        last = (bx[-1] + 1.0, by[-1] + 2.0)
        assert cmds[-2][1:] == pytest.approx(last)
        assert cmds[-1][1:] == pytest.approx(last)

    def test_single_point_columns(self, renderer):
        grid = Grid(np.array([[4.0]]), np.array([[8.0]]))
        grid.cursor_x[:] = 3.0
        assert renderer.build_paths(grid) == [[(MOVE, 4.0, 8.0), (LINE, 4.0, 8.0), (MOVE, 4.0, 8.0)]]

    def test_rounded_to_one_decimal(self, renderer):
        grid = Grid(np.array([[0.0, 0.0]]), np.array([[0.0, 10.0]]))
        grid.wave_x[:] = 1.04
        grid.wave_y[:] = 2.25
        grid.cursor_x[:] = 0.0
        cmds = renderer.build_paths(grid)[0]
        assert cmds[1] == (LINE, 1.0, 2.3)

    def test_empty_grid(self, renderer):
        assert renderer.build_paths(Grid.empty()) == []

    def test_painter_path_bounds(self, renderer, small_grid):
        rect = renderer.build_painter_path(small_grid).boundingRect()
        assert rect.left() == pytest.approx(small_grid.base_x.min() + 1.0)
        assert rect.right() == pytest.approx(small_grid.base_x.max() + 6.0)


class TestColor:
    """Pen colour from config."""

    def test_line_color_and_opacity(self, qapp):
        renderer = LineRenderer(FlowConfig(line_color=(10, 20, 30), line_opacity=0.5))
        color = renderer.line_qcolor()
        assert (color.red(), color.green(), color.blue()) == (10, 20, 30)
        assert color.alphaF() == pytest.approx(0.5, abs=0.01)

    def test_opacity_clamped(self, qapp):
        color = LineRenderer(FlowConfig(line_opacity=3.0)).line_qcolor()
        assert color.alphaF() == pytest.approx(1.0)


class TestRender:
    """Drawing onto a QImage."""

    def make_surface(self, w=320, h=200):
        from PyQt5.QtGui import QImage
        image = QImage(w, h, QImage.Format_ARGB32_Premultiplied)
        image.fill(0)
        return image

    def test_render_draws_lines(self, renderer):
        surface = self.make_surface()
        grid = Grid.rebuild(320, 200, 16, 40)
        renderer.render(surface, grid)
        assert surface_has_ink(surface, rows=[100])

    def test_render_clears_first(self, renderer):
        from PyQt5.QtGui import QColor
        surface = self.make_surface()
        surface.fill(QColor(255, 0, 0))
        renderer.render(surface, Grid.empty())
        assert not surface_has_ink(surface)

    def test_empty_grid_is_noop(self, renderer):
        surface = self.make_surface()
        renderer.render(surface, Grid.rebuild(320, 200, 0, 40))
        assert not surface_has_ink(surface)

    def test_null_surface_is_safe(self, renderer):
        from PyQt5.QtGui import QImage
        renderer.render(QImage(), Grid.rebuild(320, 200, 16, 40))
