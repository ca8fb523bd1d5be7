"""termwalk — generic traversal and rewriting of heterogeneous term structures.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    from dataclasses import dataclass

    import termwalk

    @dataclass(frozen=True)
    class Leaf:
        value: int

    @dataclass(frozen=True)
    class Pair:
        left: object
        right: object

    tree = Pair(Leaf(1), Leaf(2))

    # Apply an int -> int function everywhere; every other type is untouched
    termwalk.everywhere(lambda n: n + 1, tree, int)
    # -> Pair(Leaf(2), Leaf(3))

    # Same, but leave any Leaf(2) subtree alone
    termwalk.everywhere_but(lambda t: t != Leaf(2), lambda n: n + 1, tree, int)
    # -> Pair(Leaf(2), Leaf(2))

    # Fold a query over the whole structure
    termwalk.everything(lambda leaf: [leaf.value], tree, Leaf, default=[])
    # -> [1, 2]

    termwalk.__version__
    '0.1.0'
"""
from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any, TypeVar

from termwalk.core import (
    CastInvariantError,
    CastResult,
    Chain,
    Everything,
    Everywhere,
    EverywhereBut,
    GenericQuery,
    GenericTransform,
    Not,
    Query,
    TermwalkError,
    Transformation,
    Universal,
    UniversalQuery,
    UnresolvedTargetError,
    cast,
)
from termwalk.terms import TermAdapter, TermRegistry, default_registry

__version__: str = "0.1.0"

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


def everywhere(fn: Callable[[U], U], term: T, target: type[U] | None = None) -> T:
    """Apply ``fn`` to every value of type ``target`` in ``term``, bottom-up.

    Parameters
    ----------
    fn:
        A function from ``target`` to ``target``.
    term:
        The structure to rebuild.
    target:
        The type ``fn`` applies to.  Inferred from ``fn``'s annotation
        when omitted.

    Returns
    -------
    T
        A rebuilt copy of ``term``.
    """
    return Everywhere(Transformation(fn, target)).transform(term)


def everywhere_but(
    predicate: Callable[[Any], bool],
    fn: Callable[[U], U],
    term: T,
    target: type[U] | None = None,
) -> T:
    """Like ``everywhere``, but leave alone every subtree whose root fails ``predicate``.

    ``predicate`` is called with nodes of every type, before their
    children are visited.
    """
    return EverywhereBut(predicate, Transformation(fn, target)).transform(term)


def everything(
    fn: Callable[[U], R],
    term: Any,
    target: type[U] | None = None,
    default: R = None,  # type: ignore[assignment]
    fold: Callable[[R, R], R] = operator.add,
) -> R:
    """Fold ``fn`` over every value of type ``target`` in ``term``.

    Nodes of any other type contribute ``default``.  Results are combined
    parent first, then children in declared order, with ``fold``
    (``+`` by default).
    """
    return Everything(Query(fn, target, default), fold).query(term)


__all__ = [
    "__version__",
    # Convenience functions
    "everywhere",
    "everywhere_but",
    "everything",
    # Transforms
    "GenericTransform",
    "Transformation",
    "Universal",
    "Chain",
    "Everywhere",
    "EverywhereBut",
    # Queries
    "GenericQuery",
    "Query",
    "UniversalQuery",
    "Not",
    "Everything",
    # Terms
    "TermAdapter",
    "TermRegistry",
    "default_registry",
    # Type identity
    "CastResult",
    "cast",
    # Errors
    "TermwalkError",
    "CastInvariantError",
    "UnresolvedTargetError",
]
