"""Generic transformations and the traversals built on them.

A ``GenericTransform`` is a function that can be called on a value of
any type and returns a value of the same type.  ``Transformation``
lifts an ordinary function over one concrete type ``U`` into such a
function: on a ``U`` it calls the wrapped function, on anything else it
is the identity.

``Everywhere`` applies a generic transform to every node of a structure,
bottom-up.  ``EverywhereBut`` does the same but prunes any subtree whose
root fails a query, leaving it exactly as it was.

Usage
-----
::

    from termwalk.core.transform import Everywhere, EverywhereBut, Transformation

    increment = Transformation(lambda n: n + 1, int)
    Everywhere(increment).transform([1, (2, "x")])     # -> [2, (3, "x")]

    skip_tuples = lambda t: type(t) is not tuple
    EverywhereBut(skip_tuples, increment).transform([1, (2, "x")])
    # -> [2, (2, "x")]
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeVar

from termwalk.core.cast import cast, check_target, resolve_target
from termwalk.core.errors import CastInvariantError
from termwalk.core.query import GenericQuery, as_query
from termwalk.terms.registry import TermRegistry, map_one_transform

T = TypeVar("T")
U = TypeVar("U")


class GenericTransform(ABC):
    """A transformation that can be applied to a value of any type."""

    @abstractmethod
    def transform(self, t: T) -> T:
        """Return the transformed ``t``; the identity for uninteresting types."""

    def __call__(self, t: T) -> T:
        return self.transform(t)


class Universal(GenericTransform):
    """Wrap a callable that already accepts values of every type."""

    def __init__(self, fn: Callable[[Any], Any]) -> None:
        self._fn = fn

    def transform(self, t: T) -> T:
        return self._fn(t)

    def __repr__(self) -> str:
        return f"Universal({self._fn!r})"


class Transformation(GenericTransform):
    """Lift a function over one type ``U`` into a function over all types.

    Parameters
    ----------
    fn:
        A function from ``U`` to ``U``.  It may keep state between calls,
        e.g. a counter in a closure.
    target:
        The type ``U``.  When omitted it is read from the annotation of
        ``fn``'s first parameter.

    Raises
    ------
    UnresolvedTargetError
        If ``target`` is omitted and cannot be inferred.
    TypeError
        If ``target`` is not a plain class.

    Example
    -------
    ::

        negate = Transformation(lambda b: not b, bool)
        negate.transform(True)      # -> False
        negate.transform("string")  # -> "string"
    """

    def __init__(self, fn: Callable[[U], U], target: type[U] | None = None) -> None:
        self._fn = fn
        self._target: type = resolve_target(fn) if target is None else check_target(target)

    @property
    def target(self) -> type:
        """The type this transformation is specialised to."""
        return self._target

    def transform(self, t: T) -> T:
        forward = cast(t, self._target)
        if not forward.ok:
            return t
        produced = self._fn(forward.value)
        backward = cast(produced, type(t))
        if not backward.ok:
            raise CastInvariantError(self._target, produced)
        return backward.value

    def __repr__(self) -> str:
        return f"Transformation({self._fn!r}, {self._target.__qualname__})"


class Chain(GenericTransform):
    """Apply several generic transforms to the same value, in order."""

    def __init__(self, *transforms: GenericTransform | Callable[[Any], Any]) -> None:
        self._transforms = tuple(as_transform(f) for f in transforms)

    def transform(self, t: T) -> T:
        for f in self._transforms:
            t = f.transform(t)
        return t

    def __len__(self) -> int:
        return len(self._transforms)

    def __repr__(self) -> str:
        return f"Chain{self._transforms!r}"


class Everywhere(GenericTransform):
    """Apply a generic transform to every node of a structure, bottom-up.

    Each node's children are transformed first, in the order its adapter
    declares them; the node is then rebuilt from the results and ``f``
    is applied to the rebuilt node.

    Parameters
    ----------
    f:
        The transform to apply at every node.  A plain callable is taken
        to accept values of every type.
    registry:
        Term registry used to decompose nodes.  Defaults to the
        process-wide registry.
    """

    def __init__(
        self,
        f: GenericTransform | Callable[[Any], Any],
        registry: TermRegistry | None = None,
    ) -> None:
        self._f = as_transform(f)
        self._registry = registry

    def transform(self, t: T) -> T:
        t = map_one_transform(t, self.transform, self._registry)
        return self._f.transform(t)

    def __repr__(self) -> str:
        return f"Everywhere({self._f!r})"


class EverywhereBut(GenericTransform):
    """Like ``Everywhere``, but leave alone subtrees that fail a query.

    ``p`` is asked about each node before anything below it is visited.
    If it answers ``False`` the node is returned as is: no child is
    visited, ``f`` is not called, and ``p`` is not asked about any
    descendant.

    Parameters
    ----------
    p:
        A boolean query.  A plain callable is taken to accept values of
        every type.
    f:
        The transform to apply at every visited node.
    registry:
        Term registry used to decompose nodes.
    """

    def __init__(
        self,
        p: GenericQuery[bool] | Callable[[Any], bool],
        f: GenericTransform | Callable[[Any], Any],
        registry: TermRegistry | None = None,
    ) -> None:
        self._p = as_query(p)
        self._f = as_transform(f)
        self._registry = registry

    def transform(self, t: T) -> T:
        if not self._p.query(t):
            return t
        t = map_one_transform(t, self.transform, self._registry)
        return self._f.transform(t)

    def __repr__(self) -> str:
        return f"EverywhereBut({self._p!r}, {self._f!r})"


def as_transform(f: GenericTransform | Callable[[Any], Any]) -> GenericTransform:
    """Return ``f`` as a ``GenericTransform``, wrapping a plain callable."""
    if isinstance(f, GenericTransform):
        return f
    if callable(f):
        return Universal(f)
    raise TypeError(f"Expected a GenericTransform or a callable, got {f!r}")
