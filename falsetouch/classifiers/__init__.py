"""
Feature evaluators and stroke classifiers.

The aggregating HumanInteractionClassifier lives in
``falsetouch.classifiers.human_interaction``.
"""

from .evaluators import ThresholdEvaluator, ABOVE, BELOW
from .stroke_classifiers import (
    StrokeClassifier,
    DurationCountClassifier,
    AnglesVarianceClassifier,
    SpeedClassifier,
    EndPointLengthClassifier,
    EndPointRatioClassifier,
    TouchSizeClassifier,
    PointerCountClassifier,
    DEFAULT_CLASSIFIERS
)

__all__ = [
    'ThresholdEvaluator',
    'ABOVE',
    'BELOW',
    'StrokeClassifier',
    'DurationCountClassifier',
    'AnglesVarianceClassifier',
    'SpeedClassifier',
    'EndPointLengthClassifier',
    'EndPointRatioClassifier',
    'TouchSizeClassifier',
    'PointerCountClassifier',
    'DEFAULT_CLASSIFIERS'
]
