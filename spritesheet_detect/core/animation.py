"""
Frame playback - Minimal frame-timed animation model
"""

from typing import Any, List, Optional
from dataclasses import dataclass


DEFAULT_FRAME_DURATION = 100  # ms


@dataclass
class Frame:
    """One animation frame: an image reference and how long it shows (ms)"""
    image: Any
    duration: float = DEFAULT_FRAME_DURATION


class Animation:
    """
    Steps through a list of frames as time is fed in.

    The animation starts paused on frame 0. ``update`` advances at most one
    frame per call and resets the elapsed time when it does.
    """

    def __init__(self, frames: List[Frame]):
        self.frames = list(frames)
        self.current_index = 0
        self.is_playing = False
        self.elapsed = 0.0

    def play(self) -> None:
        self.is_playing = True

    def pause(self) -> None:
        self.is_playing = False

    def stop(self) -> None:
        """Pause and rewind to the first frame"""
        self.is_playing = False
        self.current_index = 0
        self.elapsed = 0.0

    def update(self, delta_ms: float) -> None:
        """Advance the clock by ``delta_ms`` milliseconds"""
        if not self.is_playing or not self.frames:
            return

        self.elapsed += delta_ms
        if self.elapsed >= self.frames[self.current_index].duration:
            self.elapsed = 0.0
            self.current_index = (self.current_index + 1) % len(self.frames)

    @property
    def current_frame(self) -> Optional[Frame]:
        if not self.frames:
            return None
        return self.frames[self.current_index]

    @property
    def total_duration(self) -> float:
        return sum(f.duration for f in self.frames)

    def __len__(self) -> int:
        return len(self.frames)
