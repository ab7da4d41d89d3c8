"""
Shared utilities for stroke feature extraction.

Point geometry and velocity helpers used by the stroke model and the
classifiers. Everything here is pure and works on pixel coordinates unless
a dpi is supplied.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

NANOS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True)
class Point:
    """A single recorded touch sample. Immutable once recorded."""
    x: float
    y: float
    timestamp_nanos: int
    size: Optional[float] = None

    def __repr__(self):
        return f"Point({self.x:.1f}, {self.y:.1f}, t={self.timestamp_nanos})"

    def is_finite(self) -> bool:
        coords = (self.x, self.y) if self.size is None else (self.x, self.y, self.size)
        return all(math.isfinite(c) for c in coords)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def calculate_distance(p1: Point, p2: Point) -> float:
        """Calculate Euclidean distance between two points."""
        return p1.distance_to(p2)

    @staticmethod
    def calculate_path_length(points: Sequence[Point]) -> float:
        """Calculate total path length."""
        if len(points) < 2:
            return 0.0
        dx, dy = GeometryUtils.segment_deltas(points)
        return float(np.sum(np.hypot(dx, dy)))

    @staticmethod
    def segment_deltas(points: Sequence[Point]):
        """Return the (dx, dy) arrays of consecutive segments."""
        xs = np.array([p.x for p in points], dtype=float)
        ys = np.array([p.y for p in points], dtype=float)
        return np.diff(xs), np.diff(ys)

    @staticmethod
    def direction_angles(points: Sequence[Point]) -> List[float]:
        """
        Direction of every segment that actually moves, in radians.

        Zero-length segments have no direction and are skipped. The result is
        unwrapped so that consecutive angles never differ by more than pi,
        which keeps a straight leftward stroke from flipping between -pi and pi.
        """
        if len(points) < 2:
            return []
        dx, dy = GeometryUtils.segment_deltas(points)
        moving = np.hypot(dx, dy) > 0
        if not np.any(moving):
            return []
        angles = np.unwrap(np.arctan2(dy[moving], dx[moving]))
        return angles.tolist()

    @staticmethod
    def variance(values: Sequence[float]) -> float:
        """Population variance; 0 for fewer than two values."""
        if len(values) < 2:
            return 0.0
        return float(np.var(np.asarray(values, dtype=float)))


class VelocityCalculator:
    """Utility class for velocity calculations."""

    @staticmethod
    def calculate_velocity(distance: float, duration_seconds: float) -> float:
        """Distance over time, 0 when no time has elapsed."""
        if duration_seconds <= 0:
            return 0.0
        return distance / duration_seconds
