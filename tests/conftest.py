"""
Shared fixtures for building strokes and gestures.
"""

import pytest

from falsetouch.core.classifier_data import ClassifierData
from falsetouch.core.stroke import Stroke
from falsetouch.utils.gesture_utils import Point

MS = 1_000_000  # nanoseconds


@pytest.fixture
def make_stroke():
    """Build a frozen stroke from (x, y, t_ms[, size]) tuples."""
    def _make(samples, dpi=160.0):
        stroke = Stroke(dpi)
        for sample in samples:
            x, y, t_ms = sample[:3]
            size = sample[3] if len(sample) > 3 else None
            stroke.add_point(Point(x, y, int(t_ms * MS), size))
        stroke.freeze()
        return stroke
    return _make


@pytest.fixture
def make_gesture():
    """Build ClassifierData from {contact_id: [(x, y, t_ms), ...]}."""
    def _make(contacts, dpi=160.0):
        data = ClassifierData(dpi)
        for contact_id, samples in contacts.items():
            for sample in samples:
                x, y, t_ms = sample[:3]
                size = sample[3] if len(sample) > 3 else None
                data.add_point(contact_id, x, y, int(t_ms * MS), size)
            data.end_stroke(contact_id)
        return data
    return _make


@pytest.fixture
def straight_swipe():
    """Ten points 10ms apart on a horizontal line, 20px apart."""
    return [(100 + 20 * i, 500, 10 * i) for i in range(10)]


@pytest.fixture
def zigzag_tap():
    """Three points within 5ms, reversing direction."""
    return [(200, 300, 0), (300, 300, 2.5), (200, 300, 5)]
