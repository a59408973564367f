"""Shared fixtures: synthetic spritesheets built in numpy."""

import numpy as np
import pytest
from PIL import Image


RED = (200, 30, 30, 255)


class SheetBuilder:
    """Paints solid rectangles onto a transparent (or filled) RGBA canvas."""

    def __init__(self, width, height, fill=(0, 0, 0, 0)):
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)
        self.pixels[:, :] = fill

    def paint(self, x, y, w, h, color=RED):
        self.pixels[y:y + h, x:x + w] = color
        return self

    def row_of_frames(self, count, size, y, x0=2, gutter=2, color=RED):
        for i in range(count):
            self.paint(x0 + i * (size + gutter), y, size, size, color)
        return self

    def save(self, path):
        Image.fromarray(self.pixels).save(path)
        return path


@pytest.fixture
def sheet():
    """Factory for SheetBuilder canvases."""
    return SheetBuilder


def mask_with_blocks(height, width, blocks):
    """Boolean mask with the given (x, y, w, h) blocks set."""
    mask = np.zeros((height, width), dtype=bool)
    for x, y, w, h in blocks:
        mask[y:y + h, x:x + w] = True
    return mask


@pytest.fixture
def blocks_mask():
    return mask_with_blocks
