"""
Detection Options - Tunable thresholds shared by the detectors
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field, fields, asdict

from .classifier import ClassifierOptions, Direction
from .mask import DEFAULT_ALPHA_THRESHOLD, DEFAULT_BG_TOLERANCE


@dataclass
class DetectionOptions:
    """Options for grid and animation-strip detection"""

    # Foreground mask
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD
    bg_tolerance: int = DEFAULT_BG_TOLERANCE
    bg_color: Optional[Tuple[int, int, int]] = None

    # Strip filtering
    min_fill_ratio: float = 0.01
    max_gap: int = 1

    # Classifier heuristics
    motion_epsilon: float = 2.0
    bias_epsilon: float = 0.5
    area_spike_ratio: float = 1.35
    jump_ratio: float = 1.6
    jerkiness_ratio: float = 2.2

    # Row index -> preferred direction, e.g. classic 4-row RPG sheets
    row_directions: List[Optional[str]] = field(default_factory=list)

    def __post_init__(self):
        if not 0 <= self.alpha_threshold <= 255:
            raise ValueError(f"alpha_threshold must be in 0-255, got {self.alpha_threshold}")
        if not 0 <= self.bg_tolerance <= 765:
            raise ValueError(f"bg_tolerance must be in 0-765, got {self.bg_tolerance}")
        if not 0 <= self.min_fill_ratio <= 1:
            raise ValueError(f"min_fill_ratio must be in 0-1, got {self.min_fill_ratio}")
        if self.max_gap < 0:
            raise ValueError(f"max_gap must be non-negative, got {self.max_gap}")

        if self.bg_color is not None:
            color = tuple(int(c) for c in self.bg_color)
            if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
                raise ValueError(f"bg_color must be an RGB triple in 0-255, got {self.bg_color}")
            self.bg_color = color

        directions = []
        for d in self.row_directions:
            if d is None or d == '':
                directions.append(None)
            else:
                directions.append(Direction(d).value)
        self.row_directions = directions

    def direction_for_row(self, row: int) -> Optional[Direction]:
        """Preferred direction of row band ``row`` if one was mapped"""
        if row < len(self.row_directions) and self.row_directions[row]:
            return Direction(self.row_directions[row])
        return None

    def classifier_options(self, row: Optional[int] = None) -> ClassifierOptions:
        """Classifier thresholds, with the preferred direction of ``row``"""
        return ClassifierOptions(
            motion_epsilon=self.motion_epsilon,
            bias_epsilon=self.bias_epsilon,
            area_spike_ratio=self.area_spike_ratio,
            jump_ratio=self.jump_ratio,
            jerkiness_ratio=self.jerkiness_ratio,
            preferred_direction=self.direction_for_row(row) if row is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (YAML friendly)"""
        data = asdict(self)
        if data['bg_color'] is not None:
            data['bg_color'] = list(data['bg_color'])
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DetectionOptions':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    def merged(self, **overrides) -> 'DetectionOptions':
        """Copy with the non-None ``overrides`` applied"""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return self.from_dict(data)
