"""
Stroke model: the point history of one contact from press to release.
"""

import math
from typing import List, Optional, Tuple

from ..utils.gesture_utils import NANOS_PER_SECOND, GeometryUtils, Point, VelocityCalculator
from .errors import PreconditionError


class Stroke:
    """
    Ordered, append-only sequence of points for a single contact.

    Points are kept in pixels; every geometric property is reported in
    inches using the dpi of the gesture that owns the stroke. All derived
    values are computed on demand from the point tuple.
    """

    def __init__(self, dpi: float = 1.0):
        if not dpi > 0:
            raise PreconditionError(f"dpi must be positive, got {dpi!r}")
        self.dpi = float(dpi)
        self._points: List[Point] = []
        self._frozen = False

    def __repr__(self):
        state = "frozen" if self._frozen else "capturing"
        return f"Stroke({self.count} points, {self.duration_seconds:.3f}s, {state})"

    def __len__(self):
        return len(self._points)

    def add_point(self, point: Point) -> None:
        """Append a sample; only legal while the contact is down."""
        if self._frozen:
            raise PreconditionError("Cannot append to a frozen stroke")
        if not point.is_finite():
            raise PreconditionError(f"Point coordinates must be finite: {point!r}")
        if self._points and point.timestamp_nanos < self._points[-1].timestamp_nanos:
            raise PreconditionError(
                f"Timestamp {point.timestamp_nanos} precedes previous sample "
                f"{self._points[-1].timestamp_nanos}"
            )
        self._points.append(point)

    def freeze(self) -> None:
        """Mark the contact as lifted. Idempotent."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    @property
    def count(self) -> int:
        return len(self._points)

    @property
    def duration_nanos(self) -> int:
        if len(self._points) < 2:
            return 0
        return self._points[-1].timestamp_nanos - self._points[0].timestamp_nanos

    @property
    def duration_seconds(self) -> float:
        return self.duration_nanos / NANOS_PER_SECOND

    @property
    def total_length(self) -> float:
        """Length of the travelled path in inches."""
        return GeometryUtils.calculate_path_length(self._points) / self.dpi

    @property
    def end_point_length(self) -> float:
        """Straight-line distance between first and last sample in inches."""
        if len(self._points) < 2:
            return 0.0
        return self._points[0].distance_to(self._points[-1]) / self.dpi

    @property
    def average_speed(self) -> float:
        """Inches per second over the whole stroke."""
        return VelocityCalculator.calculate_velocity(self.total_length, self.duration_seconds)

    @property
    def direction_angles(self) -> List[float]:
        return GeometryUtils.direction_angles(self._points)

    @property
    def angle_variance(self) -> float:
        return GeometryUtils.variance(self.direction_angles)

    @property
    def mean_size(self) -> Optional[float]:
        """Mean contact size in inches, or None when the digitizer reports none."""
        sizes = [p.size for p in self._points if p.size is not None]
        if not sizes:
            return None
        mean = math.fsum(sizes) / len(sizes)
        return mean / self.dpi
