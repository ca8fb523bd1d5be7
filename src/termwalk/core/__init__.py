"""termwalk core: type-gated functions and the traversals built on them."""
from __future__ import annotations

from termwalk.core.cast import CastResult, cast, resolve_target
from termwalk.core.errors import (
    CastInvariantError,
    TermwalkError,
    UnresolvedTargetError,
)
from termwalk.core.query import Everything, GenericQuery, Not, Query, UniversalQuery
from termwalk.core.transform import (
    Chain,
    Everywhere,
    EverywhereBut,
    GenericTransform,
    Transformation,
    Universal,
)

__all__ = [
    # Type identity
    "CastResult",
    "cast",
    "resolve_target",
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
    # Errors
    "TermwalkError",
    "CastInvariantError",
    "UnresolvedTargetError",
]
