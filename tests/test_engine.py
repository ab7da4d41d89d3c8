"""
Tests for the host-facing FalseTouchEngine
==========================================
"""

import json

import pytest

from falsetouch import ClassifierConfig, Decision, FalseTouchEngine, PreconditionError
from falsetouch.core.classifier_data import GestureState
from falsetouch.utils.logger import TuningLogger

MS = 1_000_000


class RecordingLogger:
    def __init__(self):
        self.verdicts = []

    def log_verdict(self, verdict):
        self.verdicts.append(verdict)


def swipe(engine, handle, contact_id=0, points=10, lift=True):
    for i in range(points):
        engine.on_touch_point(handle, contact_id, 100 + 20 * i, 800, i * 10 * MS)
    if lift:
        engine.on_touch_up(handle, contact_id)


class TestGestureFlow:

    def test_swipe_is_accepted(self):
        engine = FalseTouchEngine()
        handle = engine.begin_gesture()
        swipe(engine, handle)
        verdict = engine.evaluate(handle)
        assert verdict.decision is Decision.ACCEPT
        assert set(verdict.scores) == {"DUR", "ANG", "SPD", "LEN", "RAT", "SIZ", "PTR"}

    def test_handle_uses_configured_dpi(self):
        engine = FalseTouchEngine(ClassifierConfig(dpi=480))
        assert engine.begin_gesture().dpi == 480

    def test_early_decision_freezes_open_strokes(self):
        engine = FalseTouchEngine()
        handle = engine.begin_gesture()
        swipe(engine, handle, lift=False)
        engine.evaluate(handle)
        assert handle.get_stroke(0).frozen
        assert handle.state is GestureState.DECIDED

    def test_second_finger_raises_score(self):
        engine = FalseTouchEngine()
        handle = engine.begin_gesture()
        swipe(engine, handle, contact_id=0)
        swipe(engine, handle, contact_id=1)
        verdict = engine.evaluate(handle)
        assert verdict.scores["PTR"] == 2
        assert list(verdict.stroke_scores) == [0, 1]

    def test_palm_is_rejected(self):
        engine = FalseTouchEngine()
        handle = engine.begin_gesture()
        for i in range(3):
            engine.on_touch_point(handle, 0, 300 + i, 900, i * 4 * MS, size=160)
        engine.on_touch_up(handle, 0)
        assert engine.evaluate(handle).rejected

    def test_tuning_logger_receives_verdict(self):
        recorder = RecordingLogger()
        engine = FalseTouchEngine(tuning_logger=recorder)
        handle = engine.begin_gesture()
        swipe(engine, handle)
        verdict = engine.evaluate(handle)
        assert recorder.verdicts == [verdict]


class FailingLogger:
    def log_verdict(self, verdict):
        raise RuntimeError("disk full")


class TestTuningLoggerFailure:

    def test_verdict_survives_failing_tuning_logger(self, caplog):
        engine = FalseTouchEngine(tuning_logger=FailingLogger())
        handle = engine.begin_gesture()
        swipe(engine, handle)
        verdict = engine.evaluate(handle)
        assert verdict.decision is Decision.ACCEPT
        assert handle.state is GestureState.DECIDED
        assert "Tuning logger failed" in caplog.text


class TestContractViolations:

    def test_append_after_touch_up(self):
        engine = FalseTouchEngine()
        handle = engine.begin_gesture()
        swipe(engine, handle)
        with pytest.raises(PreconditionError):
            engine.on_touch_point(handle, 0, 0, 0, 500 * MS)

    def test_touch_up_unknown_contact(self):
        engine = FalseTouchEngine()
        with pytest.raises(PreconditionError):
            engine.on_touch_up(engine.begin_gesture(), 3)

    def test_evaluate_without_points(self):
        engine = FalseTouchEngine()
        with pytest.raises(PreconditionError):
            engine.evaluate(engine.begin_gesture())

    def test_handle_is_retired_after_evaluate(self):
        engine = FalseTouchEngine()
        handle = engine.begin_gesture()
        swipe(engine, handle)
        engine.evaluate(handle)
        with pytest.raises(PreconditionError):
            engine.evaluate(handle)
        with pytest.raises(PreconditionError):
            engine.on_touch_point(handle, 5, 0, 0, 0)

    def test_cancel_retires_handle(self):
        engine = FalseTouchEngine()
        handle = engine.begin_gesture()
        swipe(engine, handle, lift=False)
        engine.cancel(handle)
        with pytest.raises(PreconditionError):
            engine.evaluate(handle)
        with pytest.raises(PreconditionError):
            engine.cancel(handle)


class TestTuningLogger:

    def test_writes_json_lines(self, tmp_path):
        log_path = tmp_path / "tuning.jsonl"
        with TuningLogger(str(log_path)) as tuning_logger:
            engine = FalseTouchEngine(tuning_logger=tuning_logger)
            for _ in range(2):
                handle = engine.begin_gesture()
                swipe(engine, handle)
                engine.evaluate(handle)
            assert tuning_logger.count == 2

        lines = log_path.read_text().splitlines()
        assert len(lines) == 2
        entry = json.loads(lines[0])
        assert entry['decision'] == 'accept'
        assert 'timestamp' in entry
        assert entry['stroke_scores']['0']['DUR'] == 0

    def test_unwritable_path_only_warns(self, tmp_path, caplog):
        tuning_logger = TuningLogger(str(tmp_path / "missing" / "tuning.jsonl"))
        assert tuning_logger.debug_file is None
        assert "Could not open tuning log" in caplog.text
