"""
Animation Loop - Frame cadence and lifecycle for the flow field

Connects:
- NoiseField / Simulator (motion)
- PointerTracker (fed by mouse and touch events)
- Grid (rebuilt on resize)
- LineRenderer (draws into the QImage surface)

A single-shot QTimer re-arms itself at the host refresh cadence. Frames
arriving sooner than frame_interval_ms after the last drawn one are
dropped, capping the effective frame rate.
"""

import time
from typing import Optional

from PyQt5.QtCore import QEvent, QObject, QPoint, QTimer, pyqtSignal
from PyQt5.QtGui import QImage
from PyQt5.QtWidgets import QApplication, QWidget

from flowlines.config import FlowConfig
from flowlines.gui.line_renderer import LineRenderer
from flowlines.utils.logger import FLOW, logger

from .grid import Grid
from .noise import NoiseField
from .pointer import PointerTracker
from .simulator import Simulator


class AnimationLoop(QObject):
    """
    Owns one flow field engine and drives it frame by frame.

    Never raises to the host: an unusable surface disables the loop.
    """

    running_changed = pyqtSignal(bool)
    frame_rendered = pyqtSignal(int)  # Frame count

    def __init__(self, surface_widget: Optional[QWidget], config: Optional[FlowConfig] = None,
                 parent=None):
        super().__init__(parent)

        self._config = config or FlowConfig()
        self._widget = surface_widget if isinstance(surface_widget, QWidget) else None
        self._enabled = self._widget is not None
        if not self._enabled:
            logger.warning("No drawing surface, background disabled", component=FLOW,
                           details=type(surface_widget).__name__)

        # Core components
        self._noise = NoiseField(self._config.seed)
        self._pointer = PointerTracker(self._config.pointer_smoothing,
                                       self._config.max_pointer_speed)
        self._simulator = Simulator(self._config, self._noise)
        self._renderer = LineRenderer(self._config)
        self._grid = Grid.empty()
        self._surface = QImage()

        self._running = False
        self._start_time: Optional[float] = None
        self._last_frame_ms: Optional[float] = None
        self._frame_count = 0

        # Frame callback, re-armed after every run
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(self._config.refresh_interval_ms)
        self._timer.timeout.connect(self._on_timer)

    # === Accessors ===

    @property
    def config(self) -> FlowConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def running(self) -> bool:
        return self._running

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def pointer(self) -> PointerTracker:
        return self._pointer

    @property
    def noise(self) -> NoiseField:
        return self._noise

    @property
    def surface(self) -> QImage:
        """Image the renderer draws into; the host widget paints it."""
        return self._surface

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def pending(self) -> bool:
        """True while a frame callback is scheduled."""
        return self._timer.isActive()

    # === Lifecycle ===

    def start(self) -> None:
        """Build the grid, wire events and schedule the first frame."""
        if not self._enabled or self._running:
            return

        self.on_resize(self._widget.width(), self._widget.height())

        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self)

        self._start_time = time.monotonic()
        self._last_frame_ms = None
        self._running = True
        self._timer.start()

        logger.info(f"Flow field started ({self._grid.columns}x{self._grid.rows} points)",
                    component=FLOW)
        self.running_changed.emit(True)

    def stop(self) -> None:
        """Cancel the pending frame and detach listeners. Safe to repeat."""
        if not self._running:
            return

        self._running = False
        self._timer.stop()

        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)

        logger.info(f"Flow field stopped after {self._frame_count} frames", component=FLOW)
        self.running_changed.emit(False)

    # === Frames ===

    def _now_ms(self) -> float:
        return (time.monotonic() - self._start_time) * 1000.0

    def _on_timer(self) -> None:
        if self._running:
            self.tick(self._now_ms())

    def tick(self, now_ms: float) -> bool:
        """
        Run one frame callback at time ``now_ms``.

        Returns True if the frame was simulated and drawn, False if it was
        dropped by the throttle or the loop is stopped.
        """
        if not self._running:
            return False

        if self._last_frame_ms is not None and now_ms - self._last_frame_ms < self._config.frame_interval_ms:
            self._timer.start()
            return False
        self._last_frame_ms = now_ms

        self._pointer.advance()
        self._simulator.step(self._grid, self._pointer, now_ms)
        self._renderer.render(self._surface, self._grid)
        self._widget.update()

        self._frame_count += 1
        self.frame_rendered.emit(self._frame_count)
        self._timer.start()
        return True

    # === Events ===

    def on_pointer(self, abs_x: float, abs_y: float) -> None:
        """Pointer moved to global screen position (abs_x, abs_y)."""
        origin = self._widget.mapToGlobal(QPoint(0, 0)) if self._widget is not None else QPoint(0, 0)
        self._pointer.on_input(abs_x, abs_y, (origin.x(), origin.y()))

    def on_resize(self, width: int, height: int) -> None:
        """Rebuild grid and surface. The next scheduled frame draws them."""
        # Same size again (e.g. a deferred resize flushed on show): keep state
        if (not self._surface.isNull() and self._surface.width() == width
                and self._surface.height() == height):
            return
        c = self._config
        self._grid = Grid.rebuild(width, height, c.x_gap, c.y_gap, c.padding_x, c.padding_y)
        if width > 0 and height > 0:
            self._surface = QImage(width, height, QImage.Format_ARGB32_Premultiplied)
            self._surface.fill(0)
        else:
            self._surface = QImage()
        self._pointer.reset_motion()
        logger.flow(f"Grid rebuilt for {width}x{height}",
                    details=f"{self._grid.columns} columns, {self._grid.rows} rows")

    def eventFilter(self, watched, event):
        etype = event.type()
        if etype == QEvent.MouseMove:
            pos = event.globalPos()
            self.on_pointer(pos.x(), pos.y())
        elif etype in (QEvent.TouchBegin, QEvent.TouchUpdate):
            points = event.touchPoints()
            if points:
                pos = points[0].screenPos()
                self.on_pointer(pos.x(), pos.y())
        # The app-wide filter also sees the widget's own events
        elif etype == QEvent.Resize and watched is self._widget:
            size = event.size()
            self.on_resize(size.width(), size.height())
        # Observe only, never consume
        return False
