"""Type-keyed registry of term adapters.

The registry answers one question for the traversal engine: given a
Python type, which ``TermAdapter`` takes its values apart?  Lookup order
for a type ``T``:

1. an adapter registered for exactly ``T``;
2. the dataclass adapter, if ``T`` is a dataclass;
3. the named-tuple adapter, if ``T`` is a named tuple;
4. the adapter of the nearest registered base class in ``T.__mro__``;
   subclasses of the built-in containers qualify only if they keep the
   base constructor, which the built-in adapters rebuild through;
5. otherwise ``T`` is a leaf and ``resolve`` returns ``None``.

Results are cached per type; any registration change clears the cache.

Third-party packages can ship adapters through entry-points in the
"termwalk.terms" group.  Each entry-point names a ``TermAdapter``
subclass whose ``term_types`` attribute lists the types it handles::

    [project.entry-points."termwalk.terms"]
    sympy = "termwalk_sympy:SympyAdapter"

and are picked up with::

    default_registry.load_entrypoints()
"""
from __future__ import annotations

import dataclasses
import importlib.metadata
import logging
from collections.abc import Callable
from typing import Any

from termwalk.terms.adapters import (
    BUILTIN_ADAPTERS,
    DATACLASS_ADAPTER,
    NAMEDTUPLE_ADAPTER,
    TermAdapter,
)

logger = logging.getLogger(__name__)

ENTRYPOINT_GROUP = "termwalk.terms"


class AdapterNotFoundError(KeyError):
    """Raised when no adapter is registered for a type."""

    def __init__(self, term_type: type, registry_name: str) -> None:
        self.term_type = term_type
        self.registry_name = registry_name
        super().__init__(
            f"No adapter is registered for {term_type.__qualname__!r} in the "
            f"{registry_name!r} registry."
        )


class AdapterAlreadyRegisteredError(ValueError):
    """Raised when registering a type that already has an adapter."""

    def __init__(self, term_type: type, registry_name: str) -> None:
        self.term_type = term_type
        self.registry_name = registry_name
        super().__init__(
            f"{term_type.__qualname__!r} already has an adapter in the "
            f"{registry_name!r} registry. Deregister it first to replace it."
        )


def _is_namedtuple(term_type: type) -> bool:
    return issubclass(term_type, tuple) and hasattr(term_type, "_fields") and hasattr(
        term_type, "_make"
    )


_BUILTIN_TYPES = frozenset(t for t, _ in BUILTIN_ADAPTERS)


def _inherits_constructor(term_type: type, base: type) -> bool:
    """True if no class before ``base`` in ``term_type.__mro__`` defines a constructor."""
    for klass in term_type.__mro__:
        if klass is base:
            return True
        if "__new__" in vars(klass) or "__init__" in vars(klass):
            return False
    return True


class TermRegistry:
    """Maps Python types to the adapters that decompose them.

    Parameters
    ----------
    name:
        A human-readable name used in error messages and logs.
    builtins:
        When ``True`` (the default), the adapters for ``list``, ``tuple``,
        ``set``, ``frozenset``, ``dict``, ``OrderedDict`` and
        ``defaultdict`` are registered up front.
    """

    def __init__(self, name: str = "terms", builtins: bool = True) -> None:
        self._name = name
        self._adapters: dict[type, TermAdapter] = {}
        self._cache: dict[type, TermAdapter | None] = {}
        if builtins:
            for term_type, adapter in BUILTIN_ADAPTERS:
                self.register_adapter(term_type, adapter)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self, *term_types: type
    ) -> Callable[[type[TermAdapter]], type[TermAdapter]]:
        """Return a class decorator that registers an adapter class.

        The decorated class is instantiated once (with no arguments) and
        that instance is registered for every type in ``term_types``.

        Raises
        ------
        AdapterAlreadyRegisteredError
            If any of ``term_types`` already has an adapter.
        TypeError
            If the decorated class does not subclass ``TermAdapter``.
        """
        if not term_types:
            raise TypeError("register() needs at least one term type")

        def decorator(cls: type[TermAdapter]) -> type[TermAdapter]:
            if not (isinstance(cls, type) and issubclass(cls, TermAdapter)):
                raise TypeError(
                    f"Cannot register {cls!r}: it must be a subclass of TermAdapter."
                )
            adapter = cls()
            for term_type in term_types:
                self.register_adapter(term_type, adapter)
            return cls

        return decorator

    def register_adapter(self, term_type: type, adapter: TermAdapter) -> None:
        """Register ``adapter`` for values whose type is ``term_type``.

        Raises
        ------
        AdapterAlreadyRegisteredError
            If ``term_type`` already has an adapter.
        TypeError
            If ``term_type`` is not a class or ``adapter`` is not a
            ``TermAdapter`` instance.
        """
        if not isinstance(term_type, type):
            raise TypeError(f"Term type must be a class, got {term_type!r}")
        if not isinstance(adapter, TermAdapter):
            raise TypeError(
                f"Cannot register {adapter!r} for {term_type.__qualname__!r}: "
                "it must be a TermAdapter instance."
            )
        if term_type in self._adapters:
            raise AdapterAlreadyRegisteredError(term_type, self._name)
        self._adapters[term_type] = adapter
        self._cache.clear()
        logger.debug(
            "Registered adapter %r for %s in registry %r",
            adapter,
            term_type.__qualname__,
            self._name,
        )

    def deregister(self, term_type: type) -> None:
        """Remove the adapter registered for ``term_type``.

        Raises
        ------
        AdapterNotFoundError
            If ``term_type`` has no adapter of its own.
        """
        if term_type not in self._adapters:
            raise AdapterNotFoundError(term_type, self._name)
        del self._adapters[term_type]
        self._cache.clear()
        logger.debug(
            "Deregistered adapter for %s from registry %r",
            term_type.__qualname__,
            self._name,
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, term_type: type) -> TermAdapter:
        """Return the adapter registered for exactly ``term_type``.

        Raises
        ------
        AdapterNotFoundError
            If ``term_type`` has no adapter of its own.
        """
        try:
            return self._adapters[term_type]
        except KeyError:
            raise AdapterNotFoundError(term_type, self._name) from None

    def resolve(self, term_type: type) -> TermAdapter | None:
        """Return the adapter for values of ``term_type``, or ``None`` for a leaf."""
        try:
            return self._cache[term_type]
        except KeyError:
            pass
        adapter = self._lookup(term_type)
        self._cache[term_type] = adapter
        return adapter

    def _lookup(self, term_type: type) -> TermAdapter | None:
        if term_type in self._adapters:
            return self._adapters[term_type]
        if dataclasses.is_dataclass(term_type):
            return DATACLASS_ADAPTER
        if _is_namedtuple(term_type):
            return NAMEDTUPLE_ADAPTER
        for base in term_type.__mro__[1:]:
            if base in self._adapters:
                if base in _BUILTIN_TYPES and not _inherits_constructor(term_type, base):
                    logger.debug(
                        "%s overrides the %s constructor; treating it as a leaf",
                        term_type.__qualname__,
                        base.__qualname__,
                    )
                    return None
                return self._adapters[base]
        return None

    def is_leaf(self, term_type: type) -> bool:
        """Return ``True`` if values of ``term_type`` have no children."""
        return self.resolve(term_type) is None

    def registered_types(self) -> list[type]:
        """Return the explicitly registered types, sorted by qualified name."""
        return sorted(self._adapters, key=lambda t: (t.__module__, t.__qualname__))

    def __contains__(self, term_type: object) -> bool:
        return term_type in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)

    def __repr__(self) -> str:
        names = [t.__qualname__ for t in self.registered_types()]
        return f"TermRegistry(name={self._name!r}, types={names})"

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def load_entrypoints(self, group: str = ENTRYPOINT_GROUP) -> None:
        """Register adapters declared by installed distributions.

        Each entry-point must resolve to a ``TermAdapter`` subclass with
        a non-empty ``term_types``.  Types that already have an adapter
        are skipped, so repeated calls are harmless.  Entry-points that
        fail to import or do not name a usable adapter are logged and
        skipped.
        """
        for ep in importlib.metadata.entry_points(group=group):
            try:
                cls = ep.load()
            except Exception:
                logger.exception(
                    "Failed to load entry-point %r from group %r; skipping.",
                    ep.name,
                    group,
                )
                continue
            if not (isinstance(cls, type) and issubclass(cls, TermAdapter)) or not cls.term_types:
                logger.warning(
                    "Entry-point %r does not name a TermAdapter with term_types; skipping.",
                    ep.name,
                )
                continue
            adapter = cls()
            for term_type in cls.term_types:
                if term_type in self._adapters:
                    logger.debug(
                        "%s already has an adapter in %r; skipping entry-point %r.",
                        term_type.__qualname__,
                        self._name,
                        ep.name,
                    )
                    continue
                self.register_adapter(term_type, adapter)


default_registry = TermRegistry("default")


def _registry(registry: TermRegistry | None) -> TermRegistry:
    return default_registry if registry is None else registry


def children(term: Any, registry: TermRegistry | None = None) -> tuple[Any, ...]:
    """Return the immediate children of ``term``; ``()`` for a leaf."""
    adapter = _registry(registry).resolve(type(term))
    if adapter is None:
        return ()
    return adapter.children(term)


def map_one_transform(
    term: Any, f: Callable[[Any], Any], registry: TermRegistry | None = None
) -> Any:
    """Rebuild ``term`` with every immediate child replaced by ``f(child)``.

    Children are visited in declared order.  A leaf is returned as is.
    """
    adapter = _registry(registry).resolve(type(term))
    if adapter is None:
        return term
    return adapter.rebuild(term, tuple(f(child) for child in adapter.children(term)))


def map_one_query(
    term: Any, q: Callable[[Any], Any], registry: TermRegistry | None = None
) -> list[Any]:
    """Return ``q(child)`` for every immediate child of ``term``, in order."""
    return [q(child) for child in children(term, registry)]
