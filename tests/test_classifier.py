"""Tests for detection/classifier.py."""

import numpy as np
import pytest

from spritesheet_detect.detection import (
    AnimationLabel, ClassifierOptions, Direction, IntegralImage, MotionType, Rect,
    classify_animation, frame_centroid,
)


def strip(blocks_mask, frame_w, frame_h, frames):
    """
    Lay frames side by side; ``frames`` holds, per frame, a list of
    (x, y, w, h) blocks relative to the frame origin.
    """
    blocks, rects = [], []
    for i, frame_blocks in enumerate(frames):
        ox = i * frame_w
        rects.append(Rect(ox, 0, frame_w, frame_h))
        blocks.extend((ox + x, y, w, h) for x, y, w, h in frame_blocks)
    mask = blocks_mask(frame_h, frame_w * len(frames), blocks)
    return rects, mask, IntegralImage(mask)


def classify(blocks_mask, frame_w, frame_h, frames, options=None):
    rects, mask, integral = strip(blocks_mask, frame_w, frame_h, frames)
    return classify_animation(rects, mask, integral, options)


class TestMotionType:
    def test_idle(self, blocks_mask):
        label = classify(blocks_mask, 10, 10, [[(4, 4, 3, 3)]] * 4)
        assert label == AnimationLabel(MotionType.IDLE)
        assert label.name == 'idle'

    def test_walk(self, blocks_mask):
        frames = [[(x, 3, 4, 4)] for x in (10, 20, 30, 20)]
        assert classify(blocks_mask, 40, 10, frames).name == 'walk_right'

    def test_jump(self, blocks_mask):
        frames = [[(4, y, 2, 2)] for y in (7, 3, 0, 3, 7)]
        label = classify(blocks_mask, 10, 12, frames)
        assert label.motion is MotionType.JUMP
        assert label.name == 'jump_up'

    def test_vertical_without_turning_point_is_walk(self, blocks_mask):
        frames = [[(4, y, 2, 2)] for y in (0, 2, 4, 6)]
        assert classify(blocks_mask, 10, 10, frames).name == 'walk_up'

    def test_attack(self, blocks_mask):
        plain = [(2, 3, 4, 4)]
        spike = [(2, 3, 4, 4), (10, 3, 4, 4)]
        label = classify(blocks_mask, 20, 10, [plain, plain, spike, plain])
        assert label.name == 'attack_left'

    def test_hurt(self, blocks_mask):
        frames = [[(x, 3, 2, 2)] for x in (1, 11, 1, 11, 1, 11)]
        label = classify(blocks_mask, 16, 8, frames)
        assert label.motion is MotionType.HURT
        assert label.name == 'hurt_left'

    def test_two_frames_are_idle(self, blocks_mask):
        frames = [[(4, 0, 2, 2)], [(4, 6, 2, 2)]]
        label = classify(blocks_mask, 10, 10, frames)
        assert label.motion is MotionType.IDLE
        assert label.name == 'idle_up'

    def test_single_frame(self, blocks_mask):
        assert classify(blocks_mask, 10, 10, [[(0, 0, 3, 3)]]).motion is MotionType.IDLE

    def test_empty_strip_rejected(self, blocks_mask):
        mask = blocks_mask(4, 4, [])
        with pytest.raises(ValueError):
            classify_animation([], mask, IntegralImage(mask))


class TestDirection:
    def test_preferred_direction_wins(self, blocks_mask):
        frames = [[(x, 3, 4, 4)] for x in (10, 20, 30, 20)]
        options = ClassifierOptions(preferred_direction=Direction.LEFT)
        assert classify(blocks_mask, 40, 10, frames, options).name == 'walk_left'

    def test_preferred_direction_as_string(self, blocks_mask):
        frames = [[(x, 3, 4, 4)] for x in (10, 20, 30, 20)]
        options = ClassifierOptions(preferred_direction='down')
        assert classify(blocks_mask, 40, 10, frames, options).name == 'walk_down'

    def test_bias_fallback(self, blocks_mask):
        # Still sprite sitting in the right half of its frame
        label = classify(blocks_mask, 10, 10, [[(7, 4, 2, 2)]] * 3)
        assert label.name == 'idle_right'

    def test_label_str(self):
        assert str(AnimationLabel(MotionType.WALK, Direction.DOWN)) == 'walk_down'


class TestFrameCentroid:
    def test_centroid_relative_to_rect(self, blocks_mask):
        mask = blocks_mask(10, 20, [(12, 2, 2, 4)])
        assert frame_centroid(mask, Rect(10, 0, 10, 10)) == (2.5, 3.5)

    def test_empty_rect_falls_back_to_centre(self, blocks_mask):
        mask = blocks_mask(6, 10, [])
        assert frame_centroid(mask, Rect(0, 0, 10, 6)) == (5.0, 3.0)


def test_classification_is_pure(blocks_mask):
    frames = [[(x, 3, 4, 4)] for x in (10, 20, 30, 20)]
    rects, mask, integral = strip(blocks_mask, 40, 10, frames)
    before = mask.copy()

    first = classify_animation(rects, mask, integral)
    second = classify_animation(rects, mask, integral)

    assert first == second
    np.testing.assert_array_equal(mask, before)
