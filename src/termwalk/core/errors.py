"""Error types for the termwalk core.

Type mismatches are never errors in termwalk: a type-gated function
applied to a value of another type simply returns it.  The classes here
cover the remaining cases, which are defects in the caller's setup
rather than conditions to recover from at traversal time.
"""
from __future__ import annotations


class TermwalkError(Exception):
    """Base class for recoverable errors raised by termwalk."""


class UnresolvedTargetError(TypeError):
    """Raised when a type-gated function has no usable target type.

    Parameters
    ----------
    fn:
        The function whose target type could not be determined.
    reason:
        Why inference failed.
    """

    def __init__(self, fn: object, reason: str) -> None:
        self.fn = fn
        self.reason = reason
        name = getattr(fn, "__qualname__", repr(fn))
        super().__init__(
            f"Cannot determine the target type of {name}: {reason}. "
            "Pass the type explicitly, e.g. Transformation(fn, int)."
        )


class CastInvariantError(AssertionError):
    """Raised when a value cast to ``U`` cannot be cast back to ``T``.

    The forward cast only succeeds when ``T`` and ``U`` are the same
    type, so the reverse cast must succeed too.  If it does not, the
    wrapped function returned a value of a different type than it was
    given.  This is a programming error and is not meant to be caught.
    """

    def __init__(self, target: type, returned: object) -> None:
        self.target = target
        self.returned_type = type(returned)
        super().__init__(
            f"Function specialised to {target.__qualname__} returned a "
            f"{type(returned).__qualname__}; it must return the type it was given."
        )
