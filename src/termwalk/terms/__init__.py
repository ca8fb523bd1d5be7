"""Term capability for termwalk.

Exports the adapter base class, the type-keyed registry, and the
one-level operations the traversals are built on.
"""
from __future__ import annotations

from termwalk.terms.adapters import (
    DataclassAdapter,
    DefaultDictAdapter,
    MappingAdapter,
    NamedTupleAdapter,
    SequenceAdapter,
    SetAdapter,
    TermAdapter,
)
from termwalk.terms.registry import (
    ENTRYPOINT_GROUP,
    AdapterAlreadyRegisteredError,
    AdapterNotFoundError,
    TermRegistry,
    children,
    default_registry,
    map_one_query,
    map_one_transform,
)

__all__ = [
    # Adapters
    "TermAdapter",
    "SequenceAdapter",
    "NamedTupleAdapter",
    "SetAdapter",
    "MappingAdapter",
    "DefaultDictAdapter",
    "DataclassAdapter",
    # Registry
    "TermRegistry",
    "default_registry",
    "ENTRYPOINT_GROUP",
    "AdapterNotFoundError",
    "AdapterAlreadyRegisteredError",
    # One-level operations
    "children",
    "map_one_transform",
    "map_one_query",
]
