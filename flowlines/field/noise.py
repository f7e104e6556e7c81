"""
Noise Field - Seedable 2D gradient noise

Classic Perlin construction: a 256-entry base permutation mixed with the
seed, 12 edge-centred gradient directions, quintic fade interpolation.
The field is exactly zero at integer lattice corners and C1-continuous
across cell boundaries.

sample() accepts scalars or numpy arrays so a whole grid of points can be
evaluated in one call.
"""

import math
import random
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np


ArrayLike = Union[float, np.ndarray]


@dataclass(frozen=True)
class Grad:
    """Gradient direction. Only x and y take part in 2D dot products."""
    x: float
    y: float
    z: float

    def dot2(self, x: float, y: float) -> float:
        return self.x * x + self.y * y


GRAD3 = (
    Grad(1, 1, 0), Grad(-1, 1, 0), Grad(1, -1, 0), Grad(-1, -1, 0),
    Grad(1, 0, 1), Grad(-1, 0, 1), Grad(1, 0, -1), Grad(-1, 0, -1),
    Grad(0, 1, 1), Grad(0, -1, 1), Grad(0, 1, -1), Grad(0, -1, -1),
)

# Ken Perlin's reference permutation
BASE_PERMUTATION = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225, 140, 36, 103, 30,
    69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148, 247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219,
    203, 117, 35, 11, 32, 57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175, 74,
    165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122, 60, 211, 133, 230, 220, 105,
    92, 41, 55, 46, 245, 40, 244, 102, 143, 54, 65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208,
    89, 18, 169, 200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64, 52, 217,
    226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212, 207, 206, 59, 227, 47, 16, 58, 17,
    182, 189, 28, 42, 223, 183, 170, 213, 119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167,
    43, 172, 9, 129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104, 218, 246,
    97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241, 81, 51, 145, 235, 249, 14, 239,
    107, 49, 192, 214, 31, 181, 199, 106, 157, 184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254,
    138, 236, 205, 93, 222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)

TABLE_SIZE = 512

_GRAD_X = np.array([g.x for g in GRAD3], dtype=np.float64)
_GRAD_Y = np.array([g.y for g in GRAD3], dtype=np.float64)


def _fade(t):
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a, b, t):
    return (1 - t) * a + t * b


class NoiseField:
    """
    Deterministic 2D gradient noise owned by a single engine.

    Reseeding replaces the permutation and gradient tables wholesale.
    """

    def __init__(self, seed: Optional[float] = None):
        self._perm = np.zeros(TABLE_SIZE, dtype=np.int64)
        self._grad_index = np.zeros(TABLE_SIZE, dtype=np.int64)
        self._seed_value = 0
        self.seed(random.random() if seed is None else seed)

    @property
    def seed_value(self) -> int:
        """Integer seed actually used to build the tables."""
        return self._seed_value

    @property
    def permutation(self) -> np.ndarray:
        """Read-only view of the 512-entry permutation table."""
        view = self._perm.view()
        view.flags.writeable = False
        return view

    def gradient(self, index: int) -> Grad:
        """Gradient assigned to permutation slot ``index``."""
        return GRAD3[int(self._grad_index[index])]

    def seed(self, value: float) -> None:
        """Rebuild the tables from ``value``. Fractions in (0, 1) are scaled up first."""
        if not math.isfinite(value):
            value = random.random()
        if 0 < value < 1:
            value *= 65536
        value = int(math.floor(value))
        if value < 256:
            value |= value << 8

        base = np.array(BASE_PERMUTATION, dtype=np.int64)
        odd = (np.arange(256) & 1).astype(bool)
        half = np.where(odd, base ^ (value & 255), base ^ ((value >> 8) & 255))

        self._perm = np.concatenate([half, half])
        self._grad_index = self._perm % 12
        self._seed_value = value

    def sample(self, x: ArrayLike, y: ArrayLike) -> ArrayLike:
        """Evaluate the field at (x, y). Scalars in, float out; arrays in, array out."""
        scalar = np.ndim(x) == 0 and np.ndim(y) == 0
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        x0 = np.floor(x)
        y0 = np.floor(y)
        fx = x - x0
        fy = y - y0
        xi = x0.astype(np.int64) & 255
        yi = y0.astype(np.int64) & 255

        perm = self._perm
        gi = self._grad_index
        g00 = gi[xi + perm[yi]]
        g01 = gi[xi + perm[yi + 1]]
        g10 = gi[xi + 1 + perm[yi]]
        g11 = gi[xi + 1 + perm[yi + 1]]

        n00 = _GRAD_X[g00] * fx + _GRAD_Y[g00] * fy
        n01 = _GRAD_X[g01] * fx + _GRAD_Y[g01] * (fy - 1)
        n10 = _GRAD_X[g10] * (fx - 1) + _GRAD_Y[g10] * fy
        n11 = _GRAD_X[g11] * (fx - 1) + _GRAD_Y[g11] * (fy - 1)

        u = _fade(fx)
        value = _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), _fade(fy))
        if scalar:
            return float(value)
        return value
