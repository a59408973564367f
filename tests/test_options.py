"""Tests for detection/options.py."""

import pytest

from spritesheet_detect.detection import ClassifierOptions, DetectionOptions, Direction


class TestDetectionOptions:
    def test_defaults(self):
        options = DetectionOptions()
        assert options.alpha_threshold == 1
        assert options.bg_tolerance == 16
        assert options.bg_color is None
        assert options.min_fill_ratio == 0.01
        assert options.max_gap == 1
        assert options.classifier_options() == ClassifierOptions()

    @pytest.mark.parametrize("overrides", [
        {'alpha_threshold': 256},
        {'alpha_threshold': -1},
        {'bg_tolerance': 766},
        {'min_fill_ratio': 1.5},
        {'max_gap': -1},
        {'bg_color': (0, 0)},
        {'bg_color': (0, 0, 300)},
        {'row_directions': ['sideways']},
    ])
    def test_rejects_bad_values(self, overrides):
        with pytest.raises(ValueError):
            DetectionOptions(**overrides)

    def test_bg_color_normalised(self):
        assert DetectionOptions(bg_color=[255, 0, 255]).bg_color == (255, 0, 255)

    def test_row_directions(self):
        options = DetectionOptions(row_directions=[Direction.UP, None, 'left', ''])

        assert options.row_directions == ['up', None, 'left', None]
        assert options.direction_for_row(0) is Direction.UP
        assert options.direction_for_row(1) is None
        assert options.direction_for_row(2) is Direction.LEFT
        assert options.direction_for_row(10) is None

    def test_classifier_options_for_row(self):
        options = DetectionOptions(jump_ratio=2.0, row_directions=['down'])

        row_opts = options.classifier_options(0)
        assert row_opts.jump_ratio == 2.0
        assert row_opts.preferred_direction is Direction.DOWN
        assert options.classifier_options().preferred_direction is None

    def test_dict_round_trip(self):
        options = DetectionOptions(bg_color=(1, 2, 3), row_directions=['up'])
        data = options.to_dict()

        assert data['bg_color'] == [1, 2, 3]
        assert DetectionOptions.from_dict(data) == options

    def test_from_dict_ignores_unknown_keys(self):
        options = DetectionOptions.from_dict({'bg_tolerance': 30, 'colour': 'red'})
        assert options.bg_tolerance == 30

    def test_merged_skips_none(self):
        base = DetectionOptions(bg_tolerance=30)
        merged = base.merged(bg_tolerance=None, alpha_threshold=64)

        assert merged.bg_tolerance == 30
        assert merged.alpha_threshold == 64
        assert base.alpha_threshold == 1
