"""
Flow Field Engine

Noise-driven lattice of points with a spring response to the pointer.
The animation loop drives one simulation step and one redraw per frame.
"""

from .noise import NoiseField, Grad
from .grid import Grid, Point
from .pointer import PointerTracker, PointerState
from .simulator import Simulator
from .animation_loop import AnimationLoop

__all__ = [
    'NoiseField',
    'Grad',
    'Grid',
    'Point',
    'PointerTracker',
    'PointerState',
    'Simulator',
    'AnimationLoop',
]
