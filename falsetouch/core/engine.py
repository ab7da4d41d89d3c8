"""
Host-facing engine: turns touch callbacks into strokes and strokes into a verdict.
"""

import logging
from typing import Hashable, Optional, Sequence, Type

from ..classifiers.human_interaction import HumanInteractionClassifier, Verdict
from ..classifiers.stroke_classifiers import StrokeClassifier
from ..config.settings import ClassifierConfig
from .classifier_data import ClassifierData, GestureState
from .errors import PreconditionError

logger = logging.getLogger(__name__)


class FalseTouchEngine:
    """
    Call contract between the gesture recognizer and the classifiers.

    Every gesture gets its own ClassifierData handle. The handle is retired
    once it has been evaluated or cancelled; touching it afterwards is a
    precondition violation.
    """

    def __init__(self, config: Optional[ClassifierConfig] = None,
                 classifiers: Optional[Sequence[Type[StrokeClassifier]]] = None,
                 tuning_logger=None):
        self.config = config or ClassifierConfig()
        self.classifiers = classifiers
        self.tuning_logger = tuning_logger

    def begin_gesture(self) -> ClassifierData:
        return ClassifierData(self.config.dpi)

    def on_touch_point(self, handle: ClassifierData, contact_id: Hashable,
                       x: float, y: float, timestamp_nanos: int,
                       size: Optional[float] = None) -> None:
        handle.add_point(contact_id, x, y, timestamp_nanos, size)

    def on_touch_up(self, handle: ClassifierData, contact_id: Hashable) -> None:
        handle.end_stroke(contact_id)

    def evaluate(self, handle: ClassifierData) -> Verdict:
        """Decide the gesture. Contacts still down are frozen as they are."""
        if handle.active_contacts:
            logger.debug("Early decision with contacts still down: %s", handle.active_contacts)
        classifier = HumanInteractionClassifier(handle, self.config, self.classifiers)
        verdict = classifier.evaluate()
        if self.tuning_logger is not None:
            try:
                self.tuning_logger.log_verdict(verdict)
            except Exception:
                logger.exception("Tuning logger failed; verdict %s still delivered", verdict.decision.value)
        return verdict

    def cancel(self, handle: ClassifierData) -> None:
        """Abandon a gesture without evaluating it."""
        if handle.state is GestureState.DECIDED:
            raise PreconditionError("Gesture already decided")
        handle.freeze_all()
        handle.state = GestureState.DECIDED
        logger.debug("Gesture cancelled with %d strokes", handle.stroke_count)
