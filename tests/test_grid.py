"""Tests for detection/grid.py."""

import numpy as np
import pytest

from spritesheet_detect.core.parser import SheetParser
from spritesheet_detect.detection import DetectionOptions, Rect, detect_grid


class TestDetectGrid:
    def test_single_row_of_frames(self, sheet):
        # 2px margin, four 8x8 frames, 2px gutters
        canvas = sheet(42, 12).row_of_frames(4, 8, y=2)
        result = detect_grid(canvas.pixels)

        assert result.cols == 4
        assert result.rows == 1
        assert result.frame_width == 8
        assert result.frame_height == 8
        assert list(result.rects) == [Rect(2 + 10 * i, 2, 8, 8) for i in range(4)]

    def test_fully_opaque_sheet_is_one_frame(self, sheet):
        canvas = sheet(6, 5, fill=(255, 255, 255, 255))
        result = detect_grid(canvas.pixels, DetectionOptions(bg_color=(0, 0, 0)))

        assert result.rects == (Rect(0, 0, 6, 5),)
        assert (result.cols, result.rows) == (1, 1)
        assert (result.frame_width, result.frame_height) == (6, 5)

    def test_opaque_white_with_estimated_background(self, sheet):
        # Bucket midpoint 248 sits 21 away from pure white in L1
        canvas = sheet(6, 5, fill=(255, 255, 255, 255))
        assert detect_grid(canvas.pixels).rects == (Rect(0, 0, 6, 5),)

    def test_uniform_sheet_near_bucket_midpoint(self, sheet):
        canvas = sheet(6, 5, fill=(100, 100, 100, 255))
        assert detect_grid(canvas.pixels) is None

    def test_transparent_sheet(self, sheet):
        assert detect_grid(sheet(16, 16).pixels) is None

    def test_zero_sized_sheet(self):
        assert detect_grid(np.zeros((0, 0, 4), dtype=np.uint8)) is None
        assert detect_grid(np.zeros((0, 12, 4), dtype=np.uint8)) is None

    def test_ragged_last_row_skips_empty_cells(self, sheet):
        canvas = sheet(30, 21)
        canvas.row_of_frames(3, 6, y=2, gutter=3)
        canvas.row_of_frames(2, 6, y=11, gutter=3)
        result = detect_grid(canvas.pixels)

        assert (result.cols, result.rows) == (3, 2)
        assert len(result.rects) == 5
        # Row-major order
        assert [(r.x, r.y) for r in result.rects] == [
            (2, 2), (11, 2), (20, 2), (2, 11), (11, 11),
        ]

    def test_one_pixel_seam_merged(self, sheet):
        canvas = sheet(15, 9).paint(2, 2, 5, 5).paint(8, 2, 5, 5)
        result = detect_grid(canvas.pixels)

        assert result.cols == 1
        assert result.rects == (Rect(2, 2, 11, 5),)

    def test_seam_kept_without_merging(self, sheet):
        canvas = sheet(15, 9).paint(2, 2, 5, 5).paint(8, 2, 5, 5)
        result = detect_grid(canvas.pixels, DetectionOptions(max_gap=0))

        assert result.cols == 2
        assert result.rects == (Rect(2, 2, 5, 5), Rect(8, 2, 5, 5))

    def test_modal_frame_size(self, sheet):
        canvas = sheet(40, 12)
        canvas.paint(2, 2, 8, 8).paint(12, 2, 8, 8).paint(22, 2, 5, 8).paint(30, 2, 8, 8)
        result = detect_grid(canvas.pixels)
        assert result.frame_width == 8

    def test_accepts_sheet_image(self, sheet):
        canvas = sheet(42, 12).row_of_frames(4, 8, y=2)
        parsed = SheetParser.from_array(canvas.pixels)
        assert detect_grid(parsed) == detect_grid(canvas.pixels)

    def test_to_dict(self, sheet):
        canvas = sheet(22, 12).row_of_frames(2, 8, y=2)
        data = detect_grid(canvas.pixels).to_dict()

        assert data == {
            'cols': 2,
            'rows': 1,
            'frameWidth': 8,
            'frameHeight': 8,
            'rects': [
                {'x': 2, 'y': 2, 'w': 8, 'h': 8},
                {'x': 12, 'y': 2, 'w': 8, 'h': 8},
            ],
        }
