"""
Exceptions raised by the false-touch engine.
"""


class FalseTouchError(Exception):
    """Base class for engine errors."""


class PreconditionError(FalseTouchError, ValueError):
    """The host broke the call contract (append after freeze, double evaluate, ...)."""


class ConfigurationError(FalseTouchError, ValueError):
    """A threshold table, threshold or policy is malformed."""
