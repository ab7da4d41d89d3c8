"""
Per-gesture context shared by every classifier invoked for that gesture.
"""

import logging
from enum import Enum
from typing import Dict, Hashable, List, Optional

from ..utils.gesture_utils import Point
from .errors import PreconditionError
from .stroke import Stroke

logger = logging.getLogger(__name__)

DEFAULT_DPI = 160.0


class GestureState(Enum):
    """Lifecycle of one gesture."""
    CAPTURING = "capturing"
    EVALUATING = "evaluating"
    DECIDED = "decided"


class ClassifierData:
    """Display metrics plus the strokes of one gesture, in touch order."""

    def __init__(self, dpi: float = DEFAULT_DPI):
        if not dpi > 0:
            raise PreconditionError(f"dpi must be positive, got {dpi!r}")
        self.dpi = float(dpi)
        self.state = GestureState.CAPTURING
        self._strokes: Dict[Hashable, Stroke] = {}

    def __repr__(self):
        return f"ClassifierData(dpi={self.dpi}, strokes={len(self._strokes)}, state={self.state.value})"

    def px_to_inches(self, value: float) -> float:
        """Convert a pixel distance to inches."""
        return value / self.dpi

    def inches_to_px(self, value: float) -> float:
        return value * self.dpi

    def add_point(self, contact_id: Hashable, x: float, y: float,
                  timestamp_nanos: int, size: Optional[float] = None) -> Stroke:
        """Append a sample to a contact's stroke, creating the stroke on first touch."""
        self._require_capturing()
        point = Point(float(x), float(y), int(timestamp_nanos), None if size is None else float(size))
        stroke = self._strokes.get(contact_id)
        if stroke is None:
            stroke = Stroke(self.dpi)
            stroke.add_point(point)
            self._strokes[contact_id] = stroke
            logger.debug("Contact %s down", contact_id)
        else:
            stroke.add_point(point)
        return stroke

    def end_stroke(self, contact_id: Hashable) -> Stroke:
        """Freeze the stroke of a lifted contact."""
        self._require_capturing()
        stroke = self._strokes.get(contact_id)
        if stroke is None:
            raise PreconditionError(f"Unknown contact {contact_id!r}")
        stroke.freeze()
        logger.debug("Contact %s up after %d points", contact_id, stroke.count)
        return stroke

    def freeze_all(self) -> None:
        for stroke in self._strokes.values():
            stroke.freeze()

    def get_stroke(self, contact_id: Hashable) -> Optional[Stroke]:
        return self._strokes.get(contact_id)

    @property
    def strokes(self) -> List[Stroke]:
        return list(self._strokes.values())

    @property
    def contact_ids(self) -> List[Hashable]:
        return list(self._strokes.keys())

    @property
    def stroke_count(self) -> int:
        return len(self._strokes)

    @property
    def active_contacts(self) -> List[Hashable]:
        """Contacts that are still down."""
        return [cid for cid, s in self._strokes.items() if not s.frozen]

    def is_first_stroke(self, stroke: Stroke) -> bool:
        return bool(self._strokes) and next(iter(self._strokes.values())) is stroke

    def _require_capturing(self):
        if self.state is not GestureState.CAPTURING:
            raise PreconditionError(f"Gesture is {self.state.value}, no longer capturing")
