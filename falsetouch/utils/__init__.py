"""
Utilities package for stroke geometry and diagnostics logging.
"""

from .gesture_utils import (
    Point,
    GeometryUtils,
    VelocityCalculator
)
from .logger import TuningLogger, setup_logging

__all__ = [
    'Point',
    'GeometryUtils',
    'VelocityCalculator',
    'TuningLogger',
    'setup_logging'
]
