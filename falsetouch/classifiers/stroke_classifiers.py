"""
Stroke classifiers.

Each classifier extracts one feature from a stroke and hands it to its
evaluator. Strokes too short for the feature to exist score the evaluator
floor, so a degenerate stroke never blocks the decision.
"""

from typing import Optional

from ..core.classifier_data import ClassifierData
from ..core.stroke import Stroke
from .evaluators import ThresholdEvaluator


class StrokeClassifier:
    """Base class: one feature, one evaluator, fresh instance per gesture."""

    tag = "BASE"
    feature_name: Optional[str] = None
    min_points = 2

    def __init__(self, classifier_data: ClassifierData, evaluator: ThresholdEvaluator):
        self.classifier_data = classifier_data
        self.evaluator = evaluator

    @classmethod
    def from_config(cls, classifier_data: ClassifierData, config) -> 'StrokeClassifier':
        return cls(classifier_data, config.evaluator_for(cls.feature_name))

    def __repr__(self):
        return f"{type(self).__name__}(tag={self.tag!r})"

    def get_feature(self, stroke: Stroke) -> Optional[float]:
        """Return the feature value, or None when it is undefined for this stroke."""
        raise NotImplementedError

    def false_touch_evaluation(self, stroke: Stroke) -> float:
        if stroke.count < self.min_points:
            return self.evaluator.floor
        value = self.get_feature(stroke)
        if value is None:
            return self.evaluator.floor
        return self.evaluator.evaluate(value)


class DurationCountClassifier(StrokeClassifier):
    """Ratio between the duration of the stroke and its number of points."""

    tag = "DUR"
    feature_name = "duration_count"

    def get_feature(self, stroke):
        return stroke.duration_seconds / stroke.count


class AnglesVarianceClassifier(StrokeClassifier):
    """
    Variance of the direction of consecutive segments.

    A deliberate swipe keeps its heading; brushing and pocket contact wander.
    At least two moving segments are needed for a variance to exist.
    """

    tag = "ANG"
    feature_name = "angles_variance"
    min_points = 3

    def get_feature(self, stroke):
        angles = stroke.direction_angles
        if len(angles) < 2:
            return None
        return stroke.angle_variance


class SpeedClassifier(StrokeClassifier):
    """Average speed in inches per second."""

    tag = "SPD"
    feature_name = "speed"

    def get_feature(self, stroke):
        if stroke.duration_nanos <= 0:
            return None
        return stroke.average_speed


class EndPointLengthClassifier(StrokeClassifier):
    """Distance between the first and last point; short strokes score."""

    tag = "LEN"
    feature_name = "end_point_length"

    def get_feature(self, stroke):
        return stroke.end_point_length


class EndPointRatioClassifier(StrokeClassifier):
    """End-point length over travelled length; meandering strokes score."""

    tag = "RAT"
    feature_name = "end_point_ratio"

    def get_feature(self, stroke):
        total = stroke.total_length
        if total <= 0:
            return None
        return stroke.end_point_length / total


class TouchSizeClassifier(StrokeClassifier):
    """Mean contact size in inches, when the digitizer reports one. Palms are large."""

    tag = "SIZ"
    feature_name = "touch_size"
    min_points = 1

    def get_feature(self, stroke):
        return stroke.mean_size


class PointerCountClassifier(StrokeClassifier):
    """
    Number of extra contacts in the gesture.

    This is a gesture-wide feature, so it is only scored on the first
    stroke; every other stroke gets the floor.
    """

    tag = "PTR"
    feature_name = "pointer_count"
    min_points = 1

    def get_feature(self, stroke):
        if not self.classifier_data.is_first_stroke(stroke):
            return None
        return float(self.classifier_data.stroke_count - 1)


DEFAULT_CLASSIFIERS = (
    DurationCountClassifier,
    AnglesVarianceClassifier,
    SpeedClassifier,
    EndPointLengthClassifier,
    EndPointRatioClassifier,
    TouchSizeClassifier,
    PointerCountClassifier,
)
