"""
Tests for the Stroke model and ClassifierData
=============================================
"""

import math

import pytest

from falsetouch.core.classifier_data import ClassifierData, GestureState
from falsetouch.core.errors import PreconditionError
from falsetouch.core.stroke import Stroke
from falsetouch.utils.gesture_utils import Point


class TestStroke:

    def test_duration_and_count(self, make_stroke, straight_swipe):
        stroke = make_stroke(straight_swipe)
        assert stroke.count == 10
        assert stroke.duration_nanos == 90_000_000
        assert stroke.duration_seconds == pytest.approx(0.09)

    def test_lengths_are_in_inches(self, make_stroke):
        stroke = make_stroke([(0, 0, 0), (160, 0, 10), (160, 160, 20)], dpi=160)
        assert stroke.total_length == pytest.approx(2.0)
        assert stroke.end_point_length == pytest.approx(math.sqrt(2))
        assert stroke.average_speed == pytest.approx(100.0)

    def test_single_point_stroke(self, make_stroke):
        stroke = make_stroke([(10, 10, 5)])
        assert stroke.count == 1
        assert stroke.duration_seconds == 0
        assert stroke.total_length == 0
        assert stroke.average_speed == 0
        assert stroke.direction_angles == []
        assert stroke.angle_variance == 0

    def test_straight_line_has_no_angle_variance(self, make_stroke, straight_swipe):
        stroke = make_stroke(straight_swipe)
        assert stroke.angle_variance == 0

    def test_leftward_line_does_not_wrap(self, make_stroke):
        # atan2 flips between -pi and pi around a leftward heading
        stroke = make_stroke([(100, 100, 0), (90, 100.001, 1), (80, 99.999, 2), (70, 100.001, 3)])
        assert stroke.angle_variance < 0.01

    def test_reversal_variance(self, make_stroke, zigzag_tap):
        stroke = make_stroke(zigzag_tap)
        assert stroke.angle_variance == pytest.approx((math.pi / 2) ** 2)

    def test_zero_length_segments_are_skipped(self, make_stroke):
        stroke = make_stroke([(0, 0, 0), (0, 0, 1), (10, 0, 2), (10, 0, 3), (20, 0, 4)])
        assert stroke.direction_angles == [0.0, 0.0]

    def test_mean_size(self, make_stroke):
        stroke = make_stroke([(0, 0, 0, 80), (1, 0, 1, 160), (2, 0, 2)], dpi=160)
        assert stroke.mean_size == pytest.approx(0.75)
        assert make_stroke([(0, 0, 0)]).mean_size is None

    def test_append_after_freeze(self, make_stroke):
        stroke = make_stroke([(0, 0, 0)])
        with pytest.raises(PreconditionError):
            stroke.add_point(Point(1, 1, 10))

    def test_out_of_order_timestamp(self):
        stroke = Stroke()
        stroke.add_point(Point(0, 0, 100))
        with pytest.raises(PreconditionError):
            stroke.add_point(Point(1, 1, 50))

    def test_non_finite_point(self):
        with pytest.raises(PreconditionError):
            Stroke().add_point(Point(float('nan'), 0, 0))

    def test_points_are_immutable(self, make_stroke):
        stroke = make_stroke([(0, 0, 0)])
        with pytest.raises(AttributeError):
            stroke.points[0].x = 5
        assert isinstance(stroke.points, tuple)


class TestClassifierData:

    def test_strokes_keep_touch_order(self):
        data = ClassifierData(dpi=320)
        data.add_point(7, 0, 0, 0)
        data.add_point(3, 5, 5, 1)
        data.add_point(7, 1, 0, 2)
        assert data.contact_ids == [7, 3]
        assert data.get_stroke(7).count == 2
        assert data.is_first_stroke(data.get_stroke(7))
        assert not data.is_first_stroke(data.get_stroke(3))
        assert data.get_stroke(7).dpi == 320

    def test_unit_conversion(self):
        data = ClassifierData(dpi=400)
        assert data.px_to_inches(200) == 0.5
        assert data.inches_to_px(0.5) == 200

    def test_end_stroke(self):
        data = ClassifierData()
        data.add_point(0, 0, 0, 0)
        data.add_point(1, 0, 0, 0)
        data.end_stroke(0)
        assert data.active_contacts == [1]
        with pytest.raises(PreconditionError):
            data.add_point(0, 1, 1, 1)

    def test_rejected_first_point_leaves_no_stroke(self):
        data = ClassifierData()
        with pytest.raises(PreconditionError):
            data.add_point(0, float('inf'), 0, 0)
        assert data.stroke_count == 0

    def test_end_unknown_contact(self):
        with pytest.raises(PreconditionError):
            ClassifierData().end_stroke(42)

    def test_rejects_bad_dpi(self):
        with pytest.raises(PreconditionError):
            ClassifierData(dpi=0)

    def test_no_capture_after_decision(self):
        data = ClassifierData()
        data.state = GestureState.DECIDED
        with pytest.raises(PreconditionError):
            data.add_point(0, 0, 0, 0)
