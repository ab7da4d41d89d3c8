#!/usr/bin/env python3
"""
False-touch classifier - Main Entry Point
Replays a recorded answer gesture through the classifier and prints the verdict.

Gesture file (YAML or JSON)::

    dpi: 420
    strokes:
      - contact_id: 0
        points: [[x, y, timestamp_nanos], [x, y, timestamp_nanos, size], ...]
"""

import argparse
import logging
import sys

import yaml

from falsetouch import ClassifierConfig, FalseTouchEngine, FalseTouchError
from falsetouch.utils.logger import TuningLogger, setup_logging

logger = logging.getLogger("falsetouch.main")


def load_gesture(path: str) -> dict:
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict) or not isinstance(data.get('strokes'), list):
        raise FalseTouchError(f"{path}: expected a 'strokes' list")
    return data


def replay(engine: FalseTouchEngine, gesture: dict):
    """Feed a recorded gesture to the engine the way a touch dispatcher would."""
    handle = engine.begin_gesture()
    for index, stroke in enumerate(gesture['strokes']):
        if not isinstance(stroke, dict) or not isinstance(stroke.get('points', []), list):
            raise FalseTouchError(f"Stroke {index} must be a mapping with a 'points' list")
        contact_id = stroke.get('contact_id', index)
        for point in stroke.get('points', []):
            if not isinstance(point, (list, tuple)) or len(point) < 3:
                raise FalseTouchError(f"Stroke {index}: point {point!r} needs x, y and timestamp")
            x, y, t = point[:3]
            size = point[3] if len(point) > 3 else None
            engine.on_touch_point(handle, contact_id, x, y, int(t), size)
        engine.on_touch_up(handle, contact_id)
    return engine.evaluate(handle)


def main(argv=None):
    """Main entry point for the false-touch classifier."""
    parser = argparse.ArgumentParser(description="Classify a recorded answer gesture")
    parser.add_argument("gesture", help="Recorded gesture file (YAML or JSON)")
    parser.add_argument("--config", help="Classifier config YAML")
    parser.add_argument("--tuning-log", help="Append verdict diagnostics as JSON lines")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        config = ClassifierConfig.from_yaml(args.config) if args.config else ClassifierConfig()
        gesture = load_gesture(args.gesture)
        if gesture.get('dpi') is not None:
            config = config.with_dpi(gesture['dpi'])
        with TuningLogger(args.tuning_log) as tuning_logger:
            engine = FalseTouchEngine(config, tuning_logger=tuning_logger)
            verdict = replay(engine, gesture)
    except (OSError, ValueError, TypeError, yaml.YAMLError, FalseTouchError) as e:
        logger.error("%s", e)
        return 2

    print(f"{verdict.decision.value.upper()}  aggregate={verdict.aggregate:g}  threshold={verdict.threshold:g}")
    for tag, score in verdict.scores.items():
        print(f"   {tag}: {score:g}")
    return 0 if verdict.accepted else 1


if __name__ == "__main__":
    sys.exit(main())
