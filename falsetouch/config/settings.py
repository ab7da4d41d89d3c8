"""
Configuration for the false-touch classifier.

Threshold tables are data: defaults live here and can be overridden from a
dict or a YAML file without touching classifier code.
"""

import copy
import logging
import math
from typing import Any, Dict, Optional

import yaml

from ..classifiers.evaluators import ABOVE, ThresholdEvaluator
from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)

TIE_POLICIES = ("reject", "accept")
FAILURE_POLICIES = ("floor", "ceiling")


class ClassifierConfig:
    """Evaluator tables, display metrics and decision policy for one engine."""

    # Display
    DPI = 160.0

    # Decision
    REJECT_THRESHOLD = 5.0
    TIE_POLICY = "reject"        # aggregate == threshold rejects
    FAILURE_POLICY = "floor"     # a crashing classifier contributes no evidence

    # One table per feature name. Units: seconds, inches, inches/second.
    EVALUATOR_TABLES = {
        'duration_count': {
            'thresholds': [[0.0333, 1], [0.0500, 1]],
            'direction': 'above',
        },
        'angles_variance': {
            'thresholds': [[0.05, 1], [0.10, 1], [0.20, 1], [0.40, 1], [0.80, 1], [1.50, 1]],
            'direction': 'above',
        },
        'speed': {
            'thresholds': [[35.0, 1], [50.0, 1]],
            'direction': 'above',
        },
        'end_point_length': {
            'thresholds': [[0.3, 1], [0.2, 1], [0.1, 1], [0.05, 1]],
            'direction': 'below',
        },
        'end_point_ratio': {
            'thresholds': [[0.85, 1], [0.75, 1], [0.65, 1], [0.55, 1], [0.45, 1], [0.35, 1]],
            'direction': 'below',
        },
        'touch_size': {
            'thresholds': [[0.35, 1], [0.5, 1], [0.7, 1]],
            'direction': 'above',
        },
        'pointer_count': {
            'thresholds': [[0.5, 2], [1.5, 2]],
            'direction': 'above',
        },
    }

    def __init__(self, dpi: Optional[float] = None, reject_threshold: Optional[float] = None,
                 tie_policy: Optional[str] = None, failure_policy: Optional[str] = None,
                 evaluators: Optional[Dict[str, Any]] = None):
        self.dpi = self._number('dpi', self.DPI if dpi is None else dpi)
        self.reject_threshold = self._number(
            'reject_threshold', self.REJECT_THRESHOLD if reject_threshold is None else reject_threshold)
        self.tie_policy = self.TIE_POLICY if tie_policy is None else tie_policy
        self.failure_policy = self.FAILURE_POLICY if failure_policy is None else failure_policy
        self._validate_scalars()

        if evaluators is not None and not isinstance(evaluators, dict):
            raise ConfigurationError(f"evaluators must be a mapping, got {type(evaluators).__name__}")
        tables = copy.deepcopy(self.EVALUATOR_TABLES)
        for name, spec in (evaluators or {}).items():
            if name not in tables:
                logger.info("Adding table for extra feature '%s'", name)
            tables[name] = spec
        self.evaluators: Dict[str, ThresholdEvaluator] = {
            name: self._build_evaluator(name, spec) for name, spec in tables.items()
        }

    def _validate_scalars(self):
        if not (math.isfinite(self.dpi) and self.dpi > 0):
            raise ConfigurationError(f"dpi must be a positive number, got {self.dpi!r}")
        if not math.isfinite(self.reject_threshold):
            raise ConfigurationError(f"reject_threshold must be finite, got {self.reject_threshold!r}")
        if self.tie_policy not in TIE_POLICIES:
            raise ConfigurationError(f"tie_policy must be one of {TIE_POLICIES}, got {self.tie_policy!r}")
        if self.failure_policy not in FAILURE_POLICIES:
            raise ConfigurationError(
                f"failure_policy must be one of {FAILURE_POLICIES}, got {self.failure_policy!r}"
            )

    @staticmethod
    def _number(name: str, value: Any) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{name} must be a number, got {value!r}") from None

    @staticmethod
    def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
        return section

    @staticmethod
    def _build_evaluator(name: str, spec: Any) -> ThresholdEvaluator:
        if isinstance(spec, ThresholdEvaluator):
            return spec
        if isinstance(spec, dict):
            if 'thresholds' not in spec:
                raise ConfigurationError(f"Table '{name}' is missing 'thresholds'")
            return ThresholdEvaluator(spec['thresholds'], spec.get('direction', ABOVE))
        if isinstance(spec, (list, tuple)):
            return ThresholdEvaluator(spec)
        raise ConfigurationError(f"Table '{name}' must be a list or mapping, got {type(spec).__name__}")

    def with_dpi(self, dpi: float) -> 'ClassifierConfig':
        """Copy of this config for a display with a different density."""
        return type(self)(dpi, self.reject_threshold, self.tie_policy, self.failure_policy, dict(self.evaluators))

    def evaluator_for(self, feature_name: str) -> ThresholdEvaluator:
        try:
            return self.evaluators[feature_name]
        except KeyError:
            raise ConfigurationError(f"No evaluator table for feature '{feature_name}'") from None

    def is_reject(self, aggregate: float) -> bool:
        """Apply the rejection threshold and tie policy."""
        if self.tie_policy == "reject":
            return aggregate >= self.reject_threshold
        return aggregate > self.reject_threshold

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ClassifierConfig':
        """
        Build a config from the layout used by YAML files::

            display:    {dpi: 420}
            classifier: {reject_threshold: 5, tie_policy: reject, failure_policy: floor}
            evaluators: {angles_variance: [[0.05, 1], ...]}
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config root must be a mapping, got {type(data).__name__}")
        display = cls._section(data, 'display')
        classifier = cls._section(data, 'classifier')
        return cls(
            dpi=display.get('dpi'),
            reject_threshold=classifier.get('reject_threshold'),
            tie_policy=classifier.get('tie_policy'),
            failure_policy=classifier.get('failure_policy'),
            evaluators=data.get('evaluators'),
        )

    @classmethod
    def from_yaml(cls, path: str) -> 'ClassifierConfig':
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        logger.info("Loaded classifier config from %s", path)
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'display': {'dpi': self.dpi},
            'classifier': {
                'reject_threshold': self.reject_threshold,
                'tie_policy': self.tie_policy,
                'failure_policy': self.failure_policy,
            },
            'evaluators': {
                name: {
                    'thresholds': [list(row) for row in ev.table],
                    'direction': ev.direction,
                }
                for name, ev in self.evaluators.items()
            },
        }
