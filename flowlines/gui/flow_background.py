"""
Flow Background
Decorative animated line field that sits behind a window's content.
"""

from typing import Optional

from PyQt5.QtCore import QEvent, Qt
from PyQt5.QtGui import QPainter
from PyQt5.QtWidgets import QWidget

from flowlines.config import FlowConfig
from flowlines.field.animation_loop import AnimationLoop


class FlowBackground(QWidget):
    """
    Transparent widget that paints the flow field surface.

    Passes mouse events through, follows its parent's size and stays
    below its siblings.
    """

    def __init__(self, parent: Optional[QWidget] = None, config: Optional[FlowConfig] = None):
        super().__init__(parent)

        # Make transparent and pass through mouse events
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setStyleSheet("background: transparent;")

        self._loop = AnimationLoop(self, config, parent=self)
        self._resume_on_show = False

        if parent is not None:
            self.setGeometry(parent.rect())
            parent.installEventFilter(self)
            self.lower()

    @property
    def loop(self) -> AnimationLoop:
        return self._loop

    def start(self) -> None:
        """Start the animation."""
        self._loop.start()

    def stop(self) -> None:
        """Stop the animation. It stays stopped across hide and show."""
        self._resume_on_show = False
        self._loop.stop()

    def eventFilter(self, watched, event):
        # Track the parent's size
        if watched is self.parent() and event.type() == QEvent.Resize:
            self.setGeometry(watched.rect())
        return False

    def paintEvent(self, event):
        surface = self._loop.surface
        if surface.isNull():
            return
        painter = QPainter(self)
        painter.drawImage(0, 0, surface)
        painter.end()

    def hideEvent(self, event):
        super().hideEvent(event)
        # Minimize or hidden ancestor: pause, pick up again on show
        if self._loop.running:
            self._resume_on_show = True
            self._loop.stop()

    def showEvent(self, event):
        super().showEvent(event)
        if self._resume_on_show:
            self._resume_on_show = False
            self._loop.start()
