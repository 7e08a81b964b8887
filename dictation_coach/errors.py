"""Errors raised by the dictation engine.

All of them are local, recoverable rejections of a single operation.
"""


class DictationError(ValueError):
    """Base class for rejected dictation operations."""


class ValidationError(DictationError):
    """Learner input or reference text cannot be scored."""


class ConfigurationError(DictationError):
    """An engine function was called with parameters outside its contract."""


class ApproximationCaveat(UserWarning):
    """A reference window could not be derived and is empty."""
