"""
Gesture model: strokes, per-gesture context and engine errors.
"""

from .errors import FalseTouchError, PreconditionError, ConfigurationError
from .stroke import Stroke
from .classifier_data import ClassifierData, GestureState

__all__ = [
    'FalseTouchError',
    'PreconditionError',
    'ConfigurationError',
    'Stroke',
    'ClassifierData',
    'GestureState'
]
