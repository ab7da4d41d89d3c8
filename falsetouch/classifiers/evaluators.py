"""
Threshold evaluators.

An evaluator turns one scalar feature into a bounded false-touch score by
summing the increments of the thresholds the value crosses. Higher scores
mean more evidence of an accidental touch.
"""

import math
from typing import Iterable, Sequence, Tuple

from ..core.errors import ConfigurationError

ABOVE = "above"
BELOW = "below"


class ThresholdEvaluator:
    """
    Monotonic step function over an ordered ``(threshold, increment)`` table.

    With ``direction="above"`` thresholds ascend and every threshold the value
    exceeds adds its increment. With ``direction="below"`` thresholds descend
    and every threshold the value undercuts adds its increment. In both cases
    the scan stops at the first threshold that is not crossed.
    """

    def __init__(self, table: Iterable[Sequence[float]], direction: str = ABOVE):
        if direction not in (ABOVE, BELOW):
            raise ConfigurationError(f"direction must be '{ABOVE}' or '{BELOW}', got {direction!r}")
        self.direction = direction
        self.table: Tuple[Tuple[float, float], ...] = self._validate(table, direction)

    @staticmethod
    def _validate(table, direction):
        rows = []
        for row in table:
            try:
                threshold, increment = (float(v) for v in row)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Bad evaluator row {row!r}: {e}") from e
            if not (math.isfinite(threshold) and math.isfinite(increment)):
                raise ConfigurationError(f"Evaluator row must be finite: {row!r}")
            if increment < 0:
                raise ConfigurationError(f"Increment must be non-negative: {row!r}")
            rows.append((threshold, increment))

        for (prev, _), (cur, _) in zip(rows, rows[1:]):
            ordered = cur > prev if direction == ABOVE else cur < prev
            if not ordered:
                order = "ascending" if direction == ABOVE else "descending"
                raise ConfigurationError(f"Thresholds must be strictly {order}: {prev} then {cur}")
        return tuple(rows)

    @classmethod
    def uniform(cls, thresholds: Iterable[float], increment: float = 1.0,
                direction: str = ABOVE) -> 'ThresholdEvaluator':
        """Evaluator whose thresholds are all worth the same increment."""
        return cls([(t, increment) for t in thresholds], direction)

    def __repr__(self):
        return f"ThresholdEvaluator({list(self.table)!r}, direction={self.direction!r})"

    def __eq__(self, other):
        if not isinstance(other, ThresholdEvaluator):
            return NotImplemented
        return self.table == other.table and self.direction == other.direction

    @property
    def floor(self) -> float:
        return 0.0

    @property
    def ceiling(self) -> float:
        return float(sum(inc for _, inc in self.table))

    def evaluate(self, value: float) -> float:
        evaluation = 0.0
        if self.direction == ABOVE:
            for threshold, increment in self.table:
                if not value > threshold:
                    break
                evaluation += increment
        else:
            for threshold, increment in self.table:
                if not value < threshold:
                    break
                evaluation += increment
        return evaluation

    __call__ = evaluate
