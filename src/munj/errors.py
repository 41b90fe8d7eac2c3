from __future__ import annotations

__all__ = [
    "MunjError",
    "SequenceArgumentError",
    "EmptySequenceError",
    "CloneError",
    "ResourceError",
]


class MunjError(Exception):
    """Base class for errors raised by munj itself."""


class SequenceArgumentError(MunjError, TypeError):
    """A combinator was handed something it cannot pull from."""


class EmptySequenceError(MunjError, ValueError):
    """A reducer that needs a seed item got an exhausted sequence."""


class CloneError(MunjError, TypeError):
    """A group template cannot be cloned through a JSON round trip."""


class ResourceError(MunjError, OSError):
    """A named resource could not be opened or listed."""
