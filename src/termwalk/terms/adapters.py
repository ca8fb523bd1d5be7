"""Term adapters: one-level decomposition and reassembly.

A ``TermAdapter`` knows how to take one kind of value apart into its
immediate children and put it back together again.  The traversal
engine never looks inside a value itself; it asks the adapter for the
value's type.  Any type without an adapter is a leaf.

Children are always reported in the type's declared order, and
``rebuild`` must keep every piece of non-child data as it was.

Example
-------
Make a hand-written class traversable::

    from termwalk.terms import TermAdapter, default_registry

    class Call:
        def __init__(self, name, args):
            self.name = name
            self.args = args

    @default_registry.register(Call)
    class CallAdapter(TermAdapter):
        def children(self, term):
            return (term.args,)

        def rebuild(self, term, children):
            (args,) = children
            return Call(term.name, args)
"""
from __future__ import annotations

import dataclasses
import functools
import inspect
from abc import ABC, abstractmethod
from collections import OrderedDict, defaultdict
from typing import Any, ClassVar


class TermAdapter(ABC):
    """One-level view of a family of term types.

    Attributes
    ----------
    term_types:
        The types this adapter is registered for when loaded from an
        entry-point.  Built-in adapters are registered explicitly and
        leave it empty.
    """

    term_types: ClassVar[tuple[type, ...]] = ()

    @abstractmethod
    def children(self, term: Any) -> tuple[Any, ...]:
        """Return the immediate children of ``term`` in declared order."""

    @abstractmethod
    def rebuild(self, term: Any, children: tuple[Any, ...]) -> Any:
        """Return a new value like ``term`` with ``children`` in place of its own.

        ``children`` has the same length and order as ``children(term)``.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------


class SequenceAdapter(TermAdapter):
    """``list``, ``tuple`` and their plain subclasses."""

    def children(self, term: Any) -> tuple[Any, ...]:
        return tuple(term)

    def rebuild(self, term: Any, children: tuple[Any, ...]) -> Any:
        return type(term)(children)


class NamedTupleAdapter(TermAdapter):
    """Named tuples; rebuilt through ``_make`` so field names survive."""

    def children(self, term: Any) -> tuple[Any, ...]:
        return tuple(term)

    def rebuild(self, term: Any, children: tuple[Any, ...]) -> Any:
        return term._make(children)


class SetAdapter(TermAdapter):
    """``set`` and ``frozenset``.

    Children follow the set's iteration order.  Transformed elements
    that collide collapse into one, as they would in any set.
    """

    def children(self, term: Any) -> tuple[Any, ...]:
        return tuple(term)

    def rebuild(self, term: Any, children: tuple[Any, ...]) -> Any:
        return type(term)(children)


# ---------------------------------------------------------------------------
# Mappings
# ---------------------------------------------------------------------------


def _pairs(children: tuple[Any, ...]) -> list[tuple[Any, Any]]:
    return list(zip(children[0::2], children[1::2]))


def _flatten(term: Any) -> tuple[Any, ...]:
    flat: list[Any] = []
    for key, value in term.items():
        flat.append(key)
        flat.append(value)
    return tuple(flat)


class MappingAdapter(TermAdapter):
    """``dict`` and ``OrderedDict``.

    Both keys and values are children, interleaved in insertion order:
    ``k0, v0, k1, v1, ...``.
    """

    def children(self, term: Any) -> tuple[Any, ...]:
        return _flatten(term)

    def rebuild(self, term: Any, children: tuple[Any, ...]) -> Any:
        return type(term)(_pairs(children))


class DefaultDictAdapter(TermAdapter):
    """``collections.defaultdict``; the default factory is carried over."""

    def children(self, term: Any) -> tuple[Any, ...]:
        return _flatten(term)

    def rebuild(self, term: Any, children: tuple[Any, ...]) -> Any:
        return type(term)(term.default_factory, _pairs(children))


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


class DataclassAdapter(TermAdapter):
    """Dataclass instances.

    The children are the values of the ``init`` fields in declaration
    order.  Rebuilding goes through ``dataclasses.replace`` so frozen
    dataclasses and ``__post_init__`` behave as usual; the current values
    of ``init=False`` fields are then copied over from the original.

    Dataclasses that declare an ``InitVar`` cannot go through ``replace``
    (the pseudo-field is not stored on the instance), so they are rebuilt
    field by field without calling ``__init__`` or ``__post_init__``.
    """

    def children(self, term: Any) -> tuple[Any, ...]:
        return tuple(getattr(term, f.name) for f in dataclasses.fields(term) if f.init)

    def rebuild(self, term: Any, children: tuple[Any, ...]) -> Any:
        fields = dataclasses.fields(term)
        init_fields = [f for f in fields if f.init]
        changes = {f.name: child for f, child in zip(init_fields, children)}
        if _init_vars(type(term)):
            new = object.__new__(type(term))
            for name, value in changes.items():
                object.__setattr__(new, name, value)
        else:
            new = dataclasses.replace(term, **changes)
        # object.__setattr__ also gets past frozen dataclasses.
        for f in fields:
            if not f.init and hasattr(term, f.name):
                object.__setattr__(new, f.name, getattr(term, f.name))
        return new


@functools.lru_cache(maxsize=None)
def _init_vars(cls: type) -> frozenset[str]:
    """Names ``cls.__init__`` accepts that are not stored fields."""
    stored = {f.name for f in dataclasses.fields(cls) if f.init}
    params = inspect.signature(cls.__init__).parameters
    return frozenset(name for name in list(params)[1:] if name not in stored)


BUILTIN_ADAPTERS: tuple[tuple[type, TermAdapter], ...] = (
    (list, SequenceAdapter()),
    (tuple, SequenceAdapter()),
    (set, SetAdapter()),
    (frozenset, SetAdapter()),
    (dict, MappingAdapter()),
    (OrderedDict, MappingAdapter()),
    (defaultdict, DefaultDictAdapter()),
)

DATACLASS_ADAPTER = DataclassAdapter()
NAMEDTUPLE_ADAPTER = NamedTupleAdapter()
