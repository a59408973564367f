"""
Integral Image - Summed-area table over a foreground mask
"""

import numpy as np
from typing import Dict
from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned frame rectangle in sheet pixels"""
    x: int
    y: int
    w: int
    h: int

    @property
    def area(self) -> int:
        return self.w * self.h

    def to_dict(self) -> Dict[str, int]:
        return {'x': self.x, 'y': self.y, 'w': self.w, 'h': self.h}


class IntegralImage:
    """
    Prefix-sum index over a boolean mask.

    ``table[y, x]`` holds the number of foreground pixels in [0, x) x [0, y),
    so the first row and column are always zero.
    """

    def __init__(self, mask: np.ndarray):
        mask = np.asarray(mask, dtype=bool)
        if mask.ndim != 2:
            raise ValueError("Mask must be a 2-D array")

        self.height, self.width = mask.shape
        table = np.zeros((self.height + 1, self.width + 1), dtype=np.int64)
        table[1:, 1:] = mask.cumsum(axis=0, dtype=np.int64).cumsum(axis=1)
        table.flags.writeable = False
        self.table = table

    @property
    def total(self) -> int:
        """Total foreground pixel count"""
        return int(self.table[-1, -1])

    def _check_rect(self, x: int, y: int, w: int, h: int) -> None:
        if w < 0 or h < 0:
            raise ValueError(f"Negative rect size: {w}x{h}")
        if x < 0 or y < 0 or x + w > self.width or y + h > self.height:
            raise ValueError(
                f"Rect ({x}, {y}, {w}, {h}) outside {self.width}x{self.height} image"
            )

    def rect_sum(self, x: int, y: int, w: int, h: int) -> int:
        """
        Count foreground pixels inside a rectangle in O(1).

        Raises:
            ValueError: If the rectangle reaches outside the image
        """
        self._check_rect(x, y, w, h)
        t = self.table
        return int(t[y + h, x + w] - t[y, x + w] - t[y + h, x] + t[y, x])

    def count(self, rect: Rect) -> int:
        """Foreground pixels inside ``rect``"""
        return self.rect_sum(rect.x, rect.y, rect.w, rect.h)

    def row_occupancy(self, x: int = 0, w: int = None) -> np.ndarray:
        """Per-row flags: does row y contain foreground within columns [x, x+w)"""
        if w is None:
            w = self.width - x
        self._check_rect(x, 0, w, self.height)

        strip = self.table[:, x + w] - self.table[:, x]
        return np.diff(strip) > 0

    def column_occupancy(self, y: int = 0, h: int = None) -> np.ndarray:
        """Per-column flags: does column x contain foreground within rows [y, y+h)"""
        if h is None:
            h = self.height - y
        self._check_rect(0, y, self.width, h)

        band = self.table[y + h, :] - self.table[y, :]
        return np.diff(band) > 0
