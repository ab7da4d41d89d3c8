"""
Aggregates every stroke classifier over every stroke of a gesture into one
accept/reject verdict.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Hashable, Optional, Sequence, Tuple, Type

from ..config.settings import ClassifierConfig
from ..core.classifier_data import ClassifierData, GestureState
from ..core.errors import PreconditionError
from .stroke_classifiers import DEFAULT_CLASSIFIERS, StrokeClassifier

logger = logging.getLogger(__name__)


class Decision(Enum):
    ACCEPT = "accept"
    REJECT = "reject"


@dataclass(frozen=True)
class Verdict:
    """Final decision for a gesture plus the per-classifier breakdown."""
    decision: Decision
    aggregate: float
    threshold: float
    scores: Dict[str, float] = field(default_factory=dict)
    stroke_scores: Dict[Hashable, Dict[str, float]] = field(default_factory=dict)
    failed: Tuple[str, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.decision is Decision.ACCEPT

    @property
    def rejected(self) -> bool:
        return self.decision is Decision.REJECT

    def as_dict(self) -> Dict:
        return {
            'decision': self.decision.value,
            'aggregate': self.aggregate,
            'threshold': self.threshold,
            'scores': dict(self.scores),
            'stroke_scores': {str(cid): dict(s) for cid, s in self.stroke_scores.items()},
            'failed': list(self.failed),
        }


class HumanInteractionClassifier:
    """
    Sums the scores of every (stroke, classifier) pair and compares the total
    against the rejection threshold. One instance per gesture.
    """

    def __init__(self, classifier_data: ClassifierData, config: Optional[ClassifierConfig] = None,
                 classifiers: Optional[Sequence[Type[StrokeClassifier]]] = None):
        self.classifier_data = classifier_data
        self.config = config or ClassifierConfig()
        classes = DEFAULT_CLASSIFIERS if classifiers is None else tuple(classifiers)
        self.stroke_classifiers = [cls.from_config(classifier_data, self.config) for cls in classes]

        tags = [c.tag for c in self.stroke_classifiers]
        if len(set(tags)) != len(tags):
            raise PreconditionError(f"Classifier tags must be unique: {tags}")

    def evaluate(self) -> Verdict:
        data = self.classifier_data
        if data.state is not GestureState.CAPTURING:
            raise PreconditionError(f"Gesture already {data.state.value}; evaluate once per gesture")
        if data.stroke_count == 0:
            raise PreconditionError("Cannot evaluate a gesture with no recorded points")

        data.state = GestureState.EVALUATING
        data.freeze_all()

        scores = {c.tag: 0.0 for c in self.stroke_classifiers}
        stroke_scores = {}
        failed = []
        for contact_id, stroke in zip(data.contact_ids, data.strokes):
            per_stroke = {}
            for classifier in self.stroke_classifiers:
                score = self._safe_evaluation(classifier, stroke)
                if score is None:
                    score = self._failure_score(classifier)
                    if classifier.tag not in failed:
                        failed.append(classifier.tag)
                per_stroke[classifier.tag] = score
                scores[classifier.tag] += score
            stroke_scores[contact_id] = per_stroke

        aggregate = sum(scores.values())
        decision = Decision.REJECT if self.config.is_reject(aggregate) else Decision.ACCEPT
        data.state = GestureState.DECIDED

        logger.debug("Gesture %s: aggregate %.2f vs threshold %.2f %s",
                     decision.value, aggregate, self.config.reject_threshold, scores)
        return Verdict(
            decision=decision,
            aggregate=aggregate,
            threshold=self.config.reject_threshold,
            scores=scores,
            stroke_scores=stroke_scores,
            failed=tuple(failed),
        )

    @staticmethod
    def _safe_evaluation(classifier: StrokeClassifier, stroke) -> Optional[float]:
        try:
            return float(classifier.false_touch_evaluation(stroke))
        except Exception:
            logger.exception("Classifier %s failed on %r", classifier.tag, stroke)
            return None

    def _failure_score(self, classifier: StrokeClassifier) -> float:
        if self.config.failure_policy == "ceiling":
            return classifier.evaluator.ceiling
        return classifier.evaluator.floor
