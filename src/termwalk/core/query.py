"""Generic queries: read-only functions usable at every type.

A ``GenericQuery`` inspects a value and returns a result without
changing it.  ``Query`` lifts a function over one concrete type into a
query over all types, answering ``default`` for anything else.
``Everything`` folds a query over a whole structure.

Usage
-----
::

    from termwalk.core.query import Everything, Query

    count_ints = Everything(Query(lambda n: 1, int, default=0), lambda a, b: a + b)
    count_ints.query([1, "a", (2, 3)])   # -> 3
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from termwalk.core.cast import cast, check_target, resolve_target
from termwalk.terms.registry import TermRegistry, map_one_query

R = TypeVar("R")


class GenericQuery(ABC, Generic[R]):
    """A read-only query that can be asked of a value of any type."""

    @abstractmethod
    def query(self, t: Any) -> R:
        """Return this query's answer for ``t``.  Must not mutate ``t``."""

    def __call__(self, t: Any) -> R:
        return self.query(t)


class UniversalQuery(GenericQuery[R]):
    """Wrap a callable that already accepts values of every type."""

    def __init__(self, fn: Callable[[Any], R]) -> None:
        self._fn = fn

    def query(self, t: Any) -> R:
        return self._fn(t)

    def __repr__(self) -> str:
        return f"UniversalQuery({self._fn!r})"


class Query(GenericQuery[R]):
    """Lift a query over one type into a query over all types.

    Parameters
    ----------
    fn:
        The function to call on values whose type is exactly ``target``.
    target:
        The type ``fn`` is specialised to.  Inferred from the annotation
        of ``fn``'s first parameter when omitted.
    default:
        The answer for values of any other type.
    """

    def __init__(
        self,
        fn: Callable[[Any], R],
        target: type | None = None,
        default: R = None,  # type: ignore[assignment]
    ) -> None:
        self._fn = fn
        self._target = resolve_target(fn) if target is None else check_target(target)
        self._default = default

    @property
    def target(self) -> type:
        """The type this query is specialised to."""
        return self._target

    def query(self, t: Any) -> R:
        result = cast(t, self._target)
        if result.ok:
            return self._fn(result.value)
        return self._default

    def __repr__(self) -> str:
        return f"Query(target={self._target.__qualname__}, default={self._default!r})"


class Not(GenericQuery[bool]):
    """Negate a boolean query."""

    def __init__(self, q: GenericQuery[bool] | Callable[[Any], bool]) -> None:
        self._q = as_query(q)

    def query(self, t: Any) -> bool:
        return not self._q.query(t)

    def __repr__(self) -> str:
        return f"Not({self._q!r})"


class Everything(GenericQuery[R]):
    """Fold a query over every node of a structure.

    The query is asked of the node itself first; the results for each
    immediate child (computed recursively) are then folded in, left to
    right, with ``fold(accumulated, child_result)``.

    Parameters
    ----------
    q:
        The query to ask of each node.
    fold:
        Combines an accumulated result with one child's result.
    registry:
        Term registry used to find children.  Defaults to the
        process-wide registry.
    """

    def __init__(
        self,
        q: GenericQuery[R] | Callable[[Any], R],
        fold: Callable[[R, R], R],
        registry: TermRegistry | None = None,
    ) -> None:
        self._q = as_query(q)
        self._fold = fold
        self._registry = registry

    def query(self, t: Any) -> R:
        result = self._q.query(t)
        for child_result in map_one_query(t, self.query, self._registry):
            result = self._fold(result, child_result)
        return result

    def __repr__(self) -> str:
        return f"Everything({self._q!r})"


def as_query(q: GenericQuery[R] | Callable[[Any], R]) -> GenericQuery[R]:
    """Return ``q`` as a ``GenericQuery``, wrapping a plain callable."""
    if isinstance(q, GenericQuery):
        return q
    if callable(q):
        return UniversalQuery(q)
    raise TypeError(f"Expected a GenericQuery or a callable, got {q!r}")
