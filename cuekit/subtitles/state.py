"""
Active-cue tracking for externally loaded subtitles.
"""

import logging
from typing import Callable, List, Optional, Sequence

from ..models import Cue
from .parser import parse_subtitles

logger = logging.getLogger(__name__)


class ExternalSubtitleState:
    """
    Holds parsed cues and the cue active at the current playback time.

    Driven by a single playback-tick owner: ``update_time`` is called on
    every tick, ``load``/``clear`` on media changes. Calls must not overlap.

    Example:
        >>> state = ExternalSubtitleState()
        >>> state.load("1\\n00:00:01,000 --> 00:00:02,000\\nHi")
        >>> state.update_time(1.5)
        True
        >>> state.active_cue.text
        'Hi'
    """

    def __init__(self, on_change: Optional[Callable[[Optional[Cue]], None]] = None):
        """
        Initialize state.

        Args:
            on_change: Called with the new active cue (or None) when it changes
        """
        self.on_change = on_change
        self.cues: List[Cue] = []
        self.active_cue: Optional[Cue] = None

    @property
    def is_active(self) -> bool:
        """Whether external subtitles are loaded."""
        return bool(self.cues)

    def load(self, content: str) -> None:
        """Parse subtitle content and replace the stored cues."""
        self.load_cues(parse_subtitles(content))

    def load_cues(self, cues: Sequence[Cue]) -> None:
        """Replace the stored cues with already-parsed ones."""
        self.cues = sorted(cues, key=lambda cue: cue.start_time)
        self.active_cue = None
        logger.info(f"Loaded {len(self.cues)} external subtitle cues")

    def find_active_cue(self, seconds: float) -> Optional[Cue]:
        """
        Binary search for the cue on screen at ``seconds``.

        Finds the last cue whose start is at or before ``seconds`` and
        returns it if ``seconds`` falls before its end.
        """
        low, high = 0, len(self.cues) - 1
        candidate = -1

        while low <= high:
            mid = (low + high) // 2
            if self.cues[mid].start_time <= seconds:
                candidate = mid
                low = mid + 1
            else:
                high = mid - 1

        if candidate >= 0 and seconds < self.cues[candidate].end_time:
            return self.cues[candidate]
        return None

    def update_time(self, seconds: float) -> bool:
        """
        Recompute the active cue for the playback position ``seconds``.

        Returns:
            True if the active cue changed
        """
        cue = self.find_active_cue(seconds) if self.cues else None
        if cue == self.active_cue:
            return False

        self.active_cue = cue
        if self.on_change is not None:
            self.on_change(cue)
        return True

    def clear(self) -> None:
        """Drop all cues and the active cue."""
        self.cues = []
        self.active_cue = None
