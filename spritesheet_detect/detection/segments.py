"""
Projection Segmenter - Turns 1-D occupancy profiles into frame spans
"""

import numpy as np
from typing import List, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Segment:
    """A contiguous run of occupied positions along one axis"""
    start: int
    length: int

    @property
    def end(self) -> int:
        """Exclusive end index"""
        return self.start + self.length


def to_segments(occupancy: Sequence[bool]) -> List[Segment]:
    """
    Extract maximal runs of True from an occupancy profile.

    Args:
        occupancy: Boolean profile (list or 1-D numpy array)

    Returns:
        Segments in index order
    """
    filled = np.asarray(occupancy, dtype=bool)
    if filled.size == 0:
        return []

    # Rising and falling edges of the padded profile
    padded = np.concatenate(([False], filled, [False])).astype(np.int8)
    edges = np.diff(padded)
    starts = np.flatnonzero(edges == 1)
    ends = np.flatnonzero(edges == -1)

    return [Segment(int(s), int(e - s)) for s, e in zip(starts, ends)]


def merge_small_gaps(segments: List[Segment], max_gap: int) -> List[Segment]:
    """
    Merge neighbouring segments separated by at most ``max_gap`` positions.

    The gap itself becomes part of the merged segment. ``max_gap=0`` leaves
    the list untouched since consecutive runs are always at least one apart.
    """
    if len(segments) <= 1:
        return list(segments)

    merged = []
    current = segments[0]
    for seg in segments[1:]:
        gap = seg.start - current.end
        if gap <= max_gap:
            current = Segment(current.start, seg.end - current.start)
        else:
            merged.append(current)
            current = seg
    merged.append(current)

    return merged


def most_common_length(lengths: Sequence[int]) -> int:
    """
    Mode of a list of lengths.

    Ties go to the value that first reaches the winning count while scanning
    in input order. Returns 0 for an empty list.
    """
    if len(lengths) == 0:
        return 0

    counts = {}
    best = int(lengths[0])
    best_count = 0
    for value in lengths:
        value = int(value)
        counts[value] = counts.get(value, 0) + 1
        if counts[value] > best_count:
            best_count = counts[value]
            best = value

    return best
