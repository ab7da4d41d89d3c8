"""
False-touch classification for in-call answer gestures.
Decides whether a swipe on the answer surface was deliberate or accidental.
"""

from .core.engine import FalseTouchEngine
from .core.classifier_data import ClassifierData
from .core.errors import FalseTouchError, PreconditionError, ConfigurationError
from .classifiers.human_interaction import HumanInteractionClassifier, Verdict, Decision
from .config.settings import ClassifierConfig

__version__ = "1.0.0"
__all__ = [
    "FalseTouchEngine",
    "ClassifierData",
    "HumanInteractionClassifier",
    "Verdict",
    "Decision",
    "ClassifierConfig",
    "FalseTouchError",
    "PreconditionError",
    "ConfigurationError"
]
